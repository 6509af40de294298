"""Read-only projections returned by reward flight searches."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class AwardOffer:
    id: str
    cabin_points_value: Optional[int] = None
    is_saver_award: Optional[bool] = None
    cabin_class_seat_count: Optional[int] = None
    # Kept apart from the integer count; sources may supply one without the other.
    cabin_class_seat_count_string: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "cabin_points_value": self.cabin_points_value,
            "is_saver_award": self.is_saver_award,
            "cabin_class_seat_count": self.cabin_class_seat_count,
            "cabin_class_seat_count_string": self.cabin_class_seat_count_string,
        }


def _offer_dict(offer: Optional[AwardOffer]) -> Optional[Dict[str, Any]]:
    return None if offer is None else offer.to_dict()


@dataclass(frozen=True)
class RewardFlight:
    """One observed origin/destination/departure/carrier combination."""

    id: str
    origin: str
    destination: str
    departure: str
    carrier_code: str
    scraped_at: datetime
    award_economy: Optional[AwardOffer] = None
    award_business: Optional[AwardOffer] = None
    award_premium_economy: Optional[AwardOffer] = None
    award_first: Optional[AwardOffer] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "origin": self.origin,
            "destination": self.destination,
            "departure": self.departure,
            "carrier_code": self.carrier_code,
            "scraped_at": self.scraped_at.isoformat(),
            "award_economy": _offer_dict(self.award_economy),
            "award_business": _offer_dict(self.award_business),
            "award_premium_economy": _offer_dict(self.award_premium_economy),
            "award_first": _offer_dict(self.award_first),
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    """Pagination envelope shared by both search shapes.

    ``content`` is ordered within the page only. ``page_size`` is the requested
    size and may exceed ``len(content)`` on the last page or past the end.
    """

    content: List[T] = field(default_factory=list)
    page_number: int = 0
    page_size: int = 10
    total_elements: int = 0
    total_pages: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": [item.to_dict() for item in self.content],  # type: ignore[attr-defined]
            "page_number": self.page_number,
            "page_size": self.page_size,
            "total_elements": self.total_elements,
            "total_pages": self.total_pages,
        }
