"""Directory models for the clinic booking web application."""

from typing import Dict, Optional

from pydantic import BaseModel


class SpecialtyResponse(BaseModel):
    """Specialty response model."""

    id: int
    name: str
    icon: Optional[str] = None
    description: Optional[str] = None
    details: Optional[str] = None


class DoctorResponse(BaseModel):
    """Doctor response model."""

    id: int
    specialty_id: int
    name: str
    title: Optional[str] = None
    rating: Optional[float] = None
    reviews_count: int = 0
    bio: Optional[str] = None
    image: Optional[str] = None
    specialty_name: str = ""
    fees: Dict[str, Optional[float]] = {}
