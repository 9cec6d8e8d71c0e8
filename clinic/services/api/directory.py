"""Directory Module - Read-only specialty and doctor lookups."""

from typing import List

from loguru import logger

from clinic.core.exceptions import NotFoundError
from clinic.core.retry import get_directory_retry
from clinic.models import Doctor, Specialty

from .base import ApiResource

_DOCTOR_SELECT = "*,specialties(name)"


class ClinicDirectory(ApiResource):
    """Handles specialty and doctor reference data."""

    @get_directory_retry()
    async def list_specialties(self) -> List[Specialty]:
        """
        Get all specialties ordered by id.

        Raises:
            ClinicApiError: If the backend fails after retries
        """
        rows = await self._request("GET", "specialties", params={"select": "*", "order": "id.asc"})
        logger.debug(f"Retrieved {len(rows)} specialties")
        return [Specialty.from_row(row) for row in rows]

    @get_directory_retry()
    async def get_specialty(self, specialty_id: int) -> Specialty:
        """
        Get one specialty.

        Raises:
            NotFoundError: If no specialty has this id
        """
        rows = await self._request(
            "GET", "specialties", params={"select": "*", "id": f"eq.{specialty_id}"}
        )
        if not rows:
            raise NotFoundError("Specialty", specialty_id)
        return Specialty.from_row(rows[0])

    @get_directory_retry()
    async def list_doctors(self) -> List[Doctor]:
        """Get all doctors with their specialty name."""
        rows = await self._request(
            "GET", "doctors", params={"select": _DOCTOR_SELECT, "order": "id.asc"}
        )
        logger.debug(f"Retrieved {len(rows)} doctors")
        return [Doctor.from_row(row) for row in rows]

    @get_directory_retry()
    async def list_doctors_by_specialty(self, specialty_id: int) -> List[Doctor]:
        """Get the doctors belonging to one specialty."""
        rows = await self._request(
            "GET",
            "doctors",
            params={
                "select": _DOCTOR_SELECT,
                "specialty_id": f"eq.{specialty_id}",
                "order": "id.asc",
            },
        )
        return [Doctor.from_row(row) for row in rows]

    @get_directory_retry()
    async def get_doctor(self, doctor_id: int) -> Doctor:
        """
        Get one doctor.

        Raises:
            NotFoundError: If no doctor has this id
        """
        rows = await self._request(
            "GET", "doctors", params={"select": _DOCTOR_SELECT, "id": f"eq.{doctor_id}"}
        )
        if not rows:
            raise NotFoundError("Doctor", doctor_id)
        return Doctor.from_row(rows[0])
