"""Static rate and offset tables.

Tables are read once from the JSON files in ``config.DATA_DIR`` and wrapped
in frozen dataclasses backed by read-only mappings.  Every computation takes
its table as an explicit argument, defaulting to the module-level
``DEFAULT_RATE_TABLES`` / ``DEFAULT_CEREMONY_TABLE`` instances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

from . import config

logger = logging.getLogger(__name__)


class VenueClass(str, Enum):
    HOME = "home"
    COMMUNITY_HALL = "community_hall"
    HOTEL_BALLROOM = "hotel_ballroom"


class VendorTier(str, Enum):
    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"


class GuestBracket(str, Enum):
    UNDER_100 = "under_100"
    FROM_100_TO_200 = "100_200"
    FROM_200_TO_300 = "200_300"
    OVER_300 = "over_300"


DEFAULT_CITY_FACTOR = 1.0
DEFAULT_CEREMONY_OFFSET = 1


class RateTableError(ValueError):
    """Raised when a rate or ceremony table file is malformed."""


def _frozen(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RateTables:
    """Multiplier lookups for the four pricing axes."""
    venue: Mapping[str, float]
    tier: Mapping[str, float]
    bracket: Mapping[str, float]
    city: Mapping[str, float]
    venue_labels: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    tier_labels: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    bracket_labels: Mapping[str, str] = field(default_factory=lambda: _frozen({}))

    def venue_factor(self, venue_class: str) -> float:
        return self.venue[venue_class]

    def tier_factor(self, vendor_tier: str) -> float:
        return self.tier[vendor_tier]

    def bracket_factor(self, bracket: str) -> float:
        return self.bracket[bracket]

    def city_factor(self, city: Optional[str]) -> float:
        """Return the city factor, falling back to 1.0 for missing or unmapped cities."""
        if not city:
            return DEFAULT_CITY_FACTOR
        factor = self.city.get(city)
        if factor is None:
            logger.debug("No city multiplier for %r; using %s", city, DEFAULT_CITY_FACTOR)
            return DEFAULT_CITY_FACTOR
        return factor


@dataclass(frozen=True)
class CeremonyTable:
    """Day offsets per ceremony id plus the set of main-ceremony ids.

    Positive offsets are days before the wedding, negative offsets days after.
    """
    offsets: Mapping[str, int]
    main_ceremonies: FrozenSet[str]

    def is_main_ceremony(self, ceremony_id: str) -> bool:
        return ceremony_id in self.main_ceremonies

    def offset_for(self, ceremony_id: str) -> int:
        offset = self.offsets.get(ceremony_id)
        if offset is None:
            logger.debug(
                "No day offset for ceremony %r; defaulting to %d",
                ceremony_id,
                DEFAULT_CEREMONY_OFFSET,
            )
            return DEFAULT_CEREMONY_OFFSET
        return offset


def _require_keys(name: str, table: Any, keys: Any) -> Dict[str, float]:
    if not isinstance(table, dict):
        raise RateTableError(f"{name} must be an object, got {type(table).__name__}")
    missing = [key.value for key in keys if key.value not in table]
    if missing:
        raise RateTableError(f"{name} is missing factors for: {', '.join(missing)}")
    result: Dict[str, float] = {}
    for key, value in table.items():
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            raise RateTableError(f"{name}[{key!r}] must be a positive number, got {value!r}")
        result[key] = float(value)
    return result


def build_rate_tables(data: Mapping[str, Any]) -> RateTables:
    """Validate a parsed ``rates.json`` document and build a ``RateTables``.

    Raises:
        RateTableError: If a table is missing, not an object, lacks a factor
            for an enumerated key, or holds a non-positive factor.
    """
    try:
        venue = _require_keys('venue_class_multipliers', data['venue_class_multipliers'], VenueClass)
        tier = _require_keys('vendor_tier_multipliers', data['vendor_tier_multipliers'], VendorTier)
        bracket = _require_keys('guest_bracket_multipliers', data['guest_bracket_multipliers'], GuestBracket)
    except KeyError as exc:
        raise RateTableError(f"rate table missing section {exc.args[0]!r}") from exc
    city = _require_keys('city_multipliers', data.get('city_multipliers', {}), ())

    labels = data.get('labels') or {}
    return RateTables(
        venue=_frozen(venue),
        tier=_frozen(tier),
        bracket=_frozen(bracket),
        city=_frozen(city),
        venue_labels=_frozen(labels.get('venue_class', {})),
        tier_labels=_frozen(labels.get('vendor_tier', {})),
        bracket_labels=_frozen(labels.get('guest_bracket', {})),
    )


def build_ceremony_table(data: Mapping[str, Any]) -> CeremonyTable:
    """Validate a parsed ``ceremonies.json`` document and build a ``CeremonyTable``."""
    offsets = data.get('offsets', {})
    if not isinstance(offsets, dict):
        raise RateTableError("offsets must be an object")
    for key, value in offsets.items():
        if not isinstance(value, int) or isinstance(value, bool):
            raise RateTableError(f"offsets[{key!r}] must be an integer, got {value!r}")

    main = data.get('main_ceremonies', [])
    if not isinstance(main, list) or not all(isinstance(item, str) for item in main):
        raise RateTableError("main_ceremonies must be a list of strings")

    return CeremonyTable(offsets=_frozen(offsets), main_ceremonies=frozenset(main))


def load_rate_tables(data_dir: Optional[Path] = None) -> RateTables:
    return build_rate_tables(config.load_config(config.RATES_FILE, data_dir))


def load_ceremony_table(data_dir: Optional[Path] = None) -> CeremonyTable:
    return build_ceremony_table(config.load_config(config.CEREMONIES_FILE, data_dir))


DEFAULT_RATE_TABLES = load_rate_tables()
DEFAULT_CEREMONY_TABLE = load_ceremony_table()

VENUE_CLASS_LABELS = DEFAULT_RATE_TABLES.venue_labels
VENDOR_TIER_LABELS = DEFAULT_RATE_TABLES.tier_labels
GUEST_BRACKET_LABELS = DEFAULT_RATE_TABLES.bracket_labels
