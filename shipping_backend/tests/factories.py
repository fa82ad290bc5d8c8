"""
Builders for shipping catalog rows used across the test modules.
Each helper flushes so generated ids are available immediately.
"""
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.models.shipping import (
    ShippingRate,
    ShippingRateGroup,
    ShippingZone,
    ShippingZoneDistrict,
)

LIMA_DISTRICT = "150131"
UNCOVERED_DISTRICT = "080101"


def _dec(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


async def create_zone(
    session: AsyncSession,
    name: str,
    district_codes: Iterable[str] = (),
    active: bool = True,
) -> ShippingZone:
    zone = ShippingZone(name=name, active=active)
    session.add(zone)
    await session.flush()
    for code in district_codes:
        session.add(ShippingZoneDistrict(zone_id=zone.id, district_code=code))
    await session.flush()
    return zone


async def create_group(
    session: AsyncSession,
    zone: ShippingZone,
    name: str,
    order: int = 0,
    active: bool = True,
    description: Optional[str] = None,
) -> ShippingRateGroup:
    group = ShippingRateGroup(
        zone_id=zone.id, name=name, order=order, active=active, description=description
    )
    session.add(group)
    await session.flush()
    return group


async def create_rate(
    session: AsyncSession,
    group: ShippingRateGroup,
    name: str,
    base_cost=15,
    min_order_amount=None,
    max_order_amount=None,
    free_shipping_min=None,
    order: int = 0,
    active: bool = True,
    **extra,
) -> ShippingRate:
    rate = ShippingRate(
        group_id=group.id,
        name=name,
        base_cost=_dec(base_cost),
        min_order_amount=_dec(min_order_amount),
        max_order_amount=_dec(max_order_amount),
        free_shipping_min=_dec(free_shipping_min),
        order=order,
        active=active,
        **extra,
    )
    session.add(rate)
    await session.flush()
    return rate


class FailingSession:
    """Stands in for an AsyncSession whose database is unreachable."""

    def __init__(self):
        self.calls = 0

    async def execute(self, *args, **kwargs):
        self.calls += 1
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))
