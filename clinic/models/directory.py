"""Reference data owned by the clinic directory: specialties and doctors."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Specialty:
    """Medical specialty."""

    id: int
    name: str
    icon: Optional[str] = None
    description: Optional[str] = None
    details: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Specialty":
        """Build from a backend row."""
        return cls(
            id=int(row["id"]),
            name=row.get("name") or "",
            icon=row.get("icon"),
            description=row.get("description"),
            details=row.get("details"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "details": self.details,
        }


@dataclass(frozen=True)
class Doctor:
    """Doctor profile, immutable for the duration of a booking session."""

    id: int
    specialty_id: int
    name: str
    title: Optional[str] = None
    rating: Optional[float] = None
    reviews_count: int = 0
    bio: Optional[str] = None
    image: Optional[str] = None
    specialty_name: str = ""
    fees: Dict[str, Optional[float]] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Doctor":
        """
        Build from a backend row.

        The row may embed the joined specialty as ``specialties: {name}``;
        missing fee entries are normalized to None.
        """
        joined = row.get("specialties") or {}
        fees = row.get("fees") or {}
        rating = row.get("rating")
        return cls(
            id=int(row["id"]),
            specialty_id=int(row["specialty_id"]),
            name=row.get("name") or "",
            title=row.get("title"),
            rating=float(rating) if rating is not None else None,
            reviews_count=int(row.get("reviews_count") or 0),
            bio=row.get("bio"),
            image=row.get("image"),
            specialty_name=joined.get("name") or row.get("specialty") or "",
            fees={
                "examination": fees.get("examination") or None,
                "consultation": fees.get("consultation") or None,
            },
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "specialty_id": self.specialty_id,
            "name": self.name,
            "title": self.title,
            "rating": self.rating,
            "reviews_count": self.reviews_count,
            "bio": self.bio,
            "image": self.image,
            "specialty_name": self.specialty_name,
            "fees": dict(self.fees),
        }
