"""Specialty and doctor directory routes."""

from typing import List

from fastapi import APIRouter, Depends

from clinic.services.api import ClinicApiClient
from web.dependencies import get_api_client
from web.models.directory import DoctorResponse, SpecialtyResponse

router = APIRouter(prefix="/api", tags=["directory"])


@router.get("/specialties", response_model=List[SpecialtyResponse])
async def list_specialties(client: ClinicApiClient = Depends(get_api_client)):
    """Get all specialties."""
    return [s.to_dict() for s in await client.list_specialties()]


@router.get("/specialties/{specialty_id}/doctors", response_model=List[DoctorResponse])
async def list_specialty_doctors(
    specialty_id: int, client: ClinicApiClient = Depends(get_api_client)
):
    """
    Get the doctors of one specialty.

    Raises:
        NotFoundError: If the specialty does not exist
    """
    await client.get_specialty(specialty_id)
    return [d.to_dict() for d in await client.list_doctors_by_specialty(specialty_id)]


@router.get("/doctors", response_model=List[DoctorResponse])
async def list_doctors(client: ClinicApiClient = Depends(get_api_client)):
    return [d.to_dict() for d in await client.list_doctors()]


@router.get("/doctors/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(doctor_id: int, client: ClinicApiClient = Depends(get_api_client)):
    return (await client.get_doctor(doctor_id)).to_dict()
