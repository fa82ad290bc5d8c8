"""Active rate groups and rates of a shipping zone."""
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.core.logging import get_logger
from shipping_backend.app.core.metrics import record_store_failure
from shipping_backend.app.models.shipping import ShippingRate, ShippingRateGroup, ShippingZone
from shipping_backend.app.services.shipping_errors import ResolutionFailure

logger = get_logger(__name__)

GroupRates = Tuple[ShippingRateGroup, List[ShippingRate]]


class RateCatalog:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def rates_for_zone(self, zone_id: int) -> List[GroupRates]:
        """
        Active groups of a zone with their active rates, both ascending by
        `order` (ties by id, i.e. insertion order).

        Groups without any active rate are left out, so an empty list means
        the zone has nothing to offer at all.
        """
        try:
            result = await self.session.execute(
                select(ShippingRateGroup, ShippingRate)
                .join(ShippingRate, ShippingRate.group_id == ShippingRateGroup.id)
                .where(
                    ShippingRateGroup.zone_id == zone_id,
                    ShippingRateGroup.active == True,  # noqa: E712
                    ShippingRate.active == True,  # noqa: E712
                )
                .order_by(
                    ShippingRateGroup.order,
                    ShippingRateGroup.id,
                    ShippingRate.order,
                    ShippingRate.id,
                )
            )
            rows = result.all()
        except SQLAlchemyError as e:
            record_store_failure("rates_for_zone")
            logger.error("Rate catalog fetch failed", zone_id=zone_id, error=str(e))
            raise ResolutionFailure("rates_for_zone") from e

        catalog: List[GroupRates] = []
        for group, rate in rows:
            if not catalog or catalog[-1][0].id != group.id:
                catalog.append((group, []))
            catalog[-1][1].append(rate)
        return catalog

    async def get_rate(
        self, rate_id: int
    ) -> Optional[Tuple[ShippingRate, ShippingRateGroup, ShippingZone]]:
        """
        Load a rate with its group and zone. Returns None unless the rate,
        its group and its zone are all active.
        """
        try:
            result = await self.session.execute(
                select(ShippingRate, ShippingRateGroup, ShippingZone)
                .join(ShippingRateGroup, ShippingRate.group_id == ShippingRateGroup.id)
                .join(ShippingZone, ShippingRateGroup.zone_id == ShippingZone.id)
                .where(ShippingRate.id == rate_id)
            )
            row = result.one_or_none()
        except SQLAlchemyError as e:
            record_store_failure("get_rate")
            logger.error("Rate lookup failed", rate_id=rate_id, error=str(e))
            raise ResolutionFailure("get_rate") from e

        if row is None:
            return None
        rate, group, zone = row
        if not (rate.active and group.active and zone.active):
            return None
        return rate, group, zone
