"""
Location service - read-only access to the Peruvian geographic reference
(department → province → district, UBIGEO codes).
"""
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.core.exceptions import ServiceError
from shipping_backend.app.models.location import Department, District, Province


class LocationServiceError(ServiceError):
    """Base exception for location service errors."""


class LocationNotFoundError(LocationServiceError):
    def __init__(self, district_code: str):
        super().__init__(f"District {district_code} not found", 404)


class LocationService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_departments(self) -> List[Dict[str, Any]]:
        result = await self.session.execute(select(Department).order_by(Department.name))
        return [{"id": d.id, "code": d.code, "name": d.name} for d in result.scalars().all()]

    async def list_provinces(self, department_id: int) -> List[Dict[str, Any]]:
        result = await self.session.execute(
            select(Province)
            .where(Province.department_id == department_id)
            .order_by(Province.name)
        )
        return [
            {"id": p.id, "code": p.code, "name": p.name, "department_id": p.department_id}
            for p in result.scalars().all()
        ]

    async def list_districts(self, province_id: int) -> List[Dict[str, Any]]:
        result = await self.session.execute(
            select(District)
            .where(District.province_id == province_id)
            .order_by(District.name)
        )
        return [
            {"id": d.id, "code": d.code, "name": d.name, "province_id": d.province_id}
            for d in result.scalars().all()
        ]

    async def get_location(self, district_code: str) -> Dict[str, Any]:
        """
        Resolve a district code to its full location chain.

        Raises:
            LocationNotFoundError: unknown district code
        """
        result = await self.session.execute(
            select(District, Province, Department)
            .join(Province, District.province_id == Province.id)
            .join(Department, Province.department_id == Department.id)
            .where(District.code == district_code)
        )
        row = result.one_or_none()
        if row is None:
            raise LocationNotFoundError(district_code)
        district, province, department = row
        return {
            "district": district.name,
            "province": province.name,
            "department": department.name,
            "district_code": district.code,
            "province_code": province.code,
            "department_code": department.code,
        }
