"""Ceremony catalog: per-guest cost ranges and tradition defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from . import config
from .estimator import CostEstimate
from .pricing import PricingContext, compose_multiplier, round_currency
from .rates import DEFAULT_RATE_TABLES, RateTableError, RateTables

DEFAULT_TRADITION = 'general'


@dataclass(frozen=True)
class CeremonyDefinition:
    id: str
    name: str
    description: str
    cost_per_guest_low: float
    cost_per_guest_high: float
    default_guests: int
    traditions: Tuple[str, ...]


@dataclass(frozen=True)
class CeremonyCatalog:
    ceremonies: Tuple[CeremonyDefinition, ...]
    default_ceremonies: Mapping[str, Tuple[str, ...]]

    def get(self, ceremony_id: str) -> Optional[CeremonyDefinition]:
        return next((c for c in self.ceremonies if c.id == ceremony_id), None)


def build_catalog(data: Mapping[str, Any]) -> CeremonyCatalog:
    entries = data.get('catalog', [])
    if not isinstance(entries, list):
        raise RateTableError("catalog must be a list")
    try:
        ceremonies = tuple(
            CeremonyDefinition(
                id=entry['id'],
                name=entry['name'],
                description=entry.get('description', ''),
                cost_per_guest_low=float(entry['cost_per_guest_low']),
                cost_per_guest_high=float(entry['cost_per_guest_high']),
                default_guests=int(entry['default_guests']),
                traditions=tuple(entry.get('traditions', [])),
            )
            for entry in entries
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise RateTableError(f"invalid catalog entry: {exc}") from exc

    defaults = {
        tradition: tuple(ids)
        for tradition, ids in (data.get('default_ceremonies') or {}).items()
    }
    return CeremonyCatalog(ceremonies=ceremonies, default_ceremonies=defaults)


def load_catalog(data_dir: Optional[Path] = None) -> CeremonyCatalog:
    return build_catalog(config.load_config(config.CEREMONIES_FILE, data_dir))


DEFAULT_CATALOG = load_catalog()


def get_ceremony_by_id(
    ceremony_id: str, catalog: CeremonyCatalog = DEFAULT_CATALOG
) -> Optional[CeremonyDefinition]:
    return catalog.get(ceremony_id)


def get_ceremonies_for_tradition(
    tradition: str, catalog: CeremonyCatalog = DEFAULT_CATALOG
) -> List[CeremonyDefinition]:
    return [c for c in catalog.ceremonies if tradition in c.traditions]


def get_default_ceremonies_for_tradition(
    tradition: str, catalog: CeremonyCatalog = DEFAULT_CATALOG
) -> List[str]:
    """Return the ceremony ids a new wedding of ``tradition`` starts with.

    Unknown traditions get the ``general`` lineup.
    """
    defaults = catalog.default_ceremonies.get(tradition)
    if defaults is None:
        defaults = catalog.default_ceremonies.get(DEFAULT_TRADITION, ())
    return list(defaults)


def ceremony_cost_range(
    ceremony_id: str,
    guest_count: Optional[int] = None,
    context: Optional[PricingContext] = None,
    catalog: CeremonyCatalog = DEFAULT_CATALOG,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> Optional[CostEstimate]:
    """Estimate a ceremony's total cost from its per-guest catalog range.

    Args:
        ceremony_id: Catalog id of the ceremony
        guest_count: Guests attending; defaults to the catalog's default_guests
        context: When given, the range is scaled by its composed multiplier
            (with the guest count above driving the bracket)

    Returns:
        ``CostEstimate`` or None when the ceremony is not in the catalog
    """
    ceremony = catalog.get(ceremony_id)
    if ceremony is None:
        return None

    guests = ceremony.default_guests if guest_count is None else guest_count
    multiplier = 1.0
    if context is not None:
        multiplier = compose_multiplier(
            PricingContext(context.venue_class, context.vendor_tier, guests, context.city),
            tables,
        )
    return CostEstimate(
        low=round_currency(ceremony.cost_per_guest_low * guests * multiplier),
        high=round_currency(ceremony.cost_per_guest_high * guests * multiplier),
    )
