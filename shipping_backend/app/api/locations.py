"""
Public location endpoints (department → province → district selectors).
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.api.deps import get_session
from shipping_backend.app.schemas import (
    DepartmentResponse,
    DistrictResponse,
    LocationResponse,
    ProvinceResponse,
)
from shipping_backend.app.services.locations import LocationService, LocationServiceError

router = APIRouter()


@router.get("/departments", response_model=List[DepartmentResponse])
async def list_departments(session: AsyncSession = Depends(get_session)):
    return await LocationService(session).list_departments()


@router.get("/departments/{department_id}/provinces", response_model=List[ProvinceResponse])
async def list_provinces(department_id: int, session: AsyncSession = Depends(get_session)):
    return await LocationService(session).list_provinces(department_id)


@router.get("/provinces/{province_id}/districts", response_model=List[DistrictResponse])
async def list_districts(province_id: int, session: AsyncSession = Depends(get_session)):
    return await LocationService(session).list_districts(province_id)


@router.get("/districts/{district_code}", response_model=LocationResponse)
async def get_location(district_code: str, session: AsyncSession = Depends(get_session)):
    """Departamento y provincia de un distrito por su código UBIGEO."""
    try:
        return await LocationService(session).get_location(district_code)
    except LocationServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
