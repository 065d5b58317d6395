import json

from scripts import estimate_budget, validate_rate_tables


def test_validate_rate_tables_passes_on_packaged_data(capsys):
    assert validate_rate_tables.main([]) == 0
    assert 'validated successfully' in capsys.readouterr().out


def test_validate_rate_tables_reports_errors(tmp_path, capsys):
    (tmp_path / 'rates.json').write_text(json.dumps({'venue_class_multipliers': {}}), encoding='utf-8')
    (tmp_path / 'ceremonies.json').write_text(json.dumps({'offsets': {'mehndi': 'three'}}), encoding='utf-8')
    assert validate_rate_tables.main(['--data-dir', str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert 'rates:' in out
    assert 'ceremony offsets:' in out


def test_estimate_budget_prints_total(tmp_path, capsys):
    items = [
        {'category': 'Catering', 'lowCost': 10, 'highCost': 20, 'unit': 'per_person'},
        {'category': 'Decor', 'lowCost': 1000, 'highCost': 2000},
    ]
    path = tmp_path / 'items.json'
    path.write_text(json.dumps(items), encoding='utf-8')
    code = estimate_budget.main([str(path), '--venue', 'hotel_ballroom', '--tier', 'premium', '--guests', '200'])
    out = capsys.readouterr().out
    assert code == 0
    assert 'Base price' in out
    assert 'Total: $3,000.00 – $6,000.00' in out


def test_estimate_budget_missing_file(tmp_path):
    assert estimate_budget.main([str(tmp_path / 'missing.json')]) == 1
