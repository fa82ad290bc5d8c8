"""District → shipping zone lookup."""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.core.logging import get_logger
from shipping_backend.app.core.metrics import record_store_failure
from shipping_backend.app.models.shipping import ShippingZone, ShippingZoneDistrict
from shipping_backend.app.services.shipping_errors import ResolutionFailure

logger = get_logger(__name__)


class ZoneDirectory:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_zone_for_district(self, district_code: str) -> Optional[ShippingZone]:
        """
        Find the active zone a district is assigned to.

        An assignment pointing at an inactive zone counts as no coverage.
        Store errors raise ResolutionFailure instead of returning None, so
        an outage is never reported as "not served".
        """
        try:
            result = await self.session.execute(
                select(ShippingZone)
                .join(ShippingZoneDistrict, ShippingZoneDistrict.zone_id == ShippingZone.id)
                .where(ShippingZoneDistrict.district_code == district_code)
            )
            zone = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            record_store_failure("find_zone_for_district")
            logger.error("Zone lookup failed", district_code=district_code, error=str(e))
            raise ResolutionFailure("find_zone_for_district") from e

        if zone is None:
            return None
        if not zone.active:
            logger.debug("District assigned to inactive zone", district_code=district_code, zone_id=zone.id)
            return None
        return zone
