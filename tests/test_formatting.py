from decimal import Decimal

from wedding_planner.formatting import format_compact_currency, format_currency, format_multiplier


def test_format_currency():
    assert format_currency(1234.56) == '$1,234.56'
    assert format_currency(Decimal('-50')) == '-$50.00'
    assert format_currency(1234.56, include_sign=False) == '1,234.56'


def test_format_compact_currency():
    assert format_compact_currency(12500) == '$13k'
    assert format_compact_currency(11499) == '$11k'
    assert format_compact_currency(950) == '$950'


def test_format_multiplier():
    assert format_multiplier(1.0) == 'Base price'
    assert format_multiplier(0.6) == '40% savings'
    assert format_multiplier(0.85) == '15% savings'
    assert format_multiplier(1.5) == '50% premium'
