"""Cabin classes and the award table each one is stored in."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Type

from .models import AwardBusiness, AwardEconomy, AwardFirst, AwardPremiumEconomy, Base


class CabinClass(str, Enum):
    ECONOMY = "ECONOMY"
    PREMIUM_ECONOMY = "PREMIUM_ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"


@dataclass(frozen=True)
class CabinTable:
    """Where a cabin's awards live and how its joined columns are labelled.

    ``prefix`` is the alias used for the joined table; every award column is
    selected as ``<prefix>_<column>``. ``slot`` names the matching attribute on
    :class:`~reward_search.entities.RewardFlight`.
    """

    cabin: CabinClass
    model: Type[Base]
    prefix: str
    slot: str

    def label(self, column: str) -> str:
        return f"{self.prefix}_{column}"


AWARD_COLUMNS: Tuple[str, ...] = (
    "id",
    "cabin_points_value",
    "is_saver_award",
    "cabin_class_seat_count",
    "cabin_class_seat_count_string",
)

CABIN_TABLES: Tuple[CabinTable, ...] = (
    CabinTable(CabinClass.ECONOMY, AwardEconomy, "ae", "award_economy"),
    CabinTable(CabinClass.BUSINESS, AwardBusiness, "ab", "award_business"),
    CabinTable(CabinClass.PREMIUM_ECONOMY, AwardPremiumEconomy, "ape", "award_premium_economy"),
    CabinTable(CabinClass.FIRST, AwardFirst, "af", "award_first"),
)

CABIN_TABLE_BY_CLASS: Dict[CabinClass, CabinTable] = {table.cabin: table for table in CABIN_TABLES}

# First class has no cheapest-first ordering.
CHEAPEST_SEARCH_CABINS: Tuple[CabinClass, ...] = (
    CabinClass.ECONOMY,
    CabinClass.PREMIUM_ECONOMY,
    CabinClass.BUSINESS,
)


def parse_cheapest_cabin(value: str) -> CabinClass:
    """Return the cabin for ``value`` or raise ``ValueError`` if it cannot be searched."""

    try:
        cabin = CabinClass(value)
    except ValueError:
        cabin = None
    if cabin not in CHEAPEST_SEARCH_CABINS:
        raise ValueError("Invalid cabin type. Expected ECONOMY, PREMIUM_ECONOMY, or BUSINESS")
    return cabin
