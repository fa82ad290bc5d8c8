from decimal import Decimal
from typing import Optional
from sqlalchemy import String, Text, ForeignKey, Integer, DECIMAL, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column
from shipping_backend.app.core.base import Base


class ShippingZone(Base):
    __tablename__ = 'shipping_zones'

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True)


class ShippingZoneDistrict(Base):
    """Assignment of a district to a zone. A district belongs to at most one zone."""
    __tablename__ = 'shipping_zone_districts'

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    zone_id: Mapped[int] = mapped_column(ForeignKey('shipping_zones.id', ondelete='CASCADE'))
    # Not a FK: assignments may reference districts before the reference table is loaded
    district_code: Mapped[str] = mapped_column(String(6), unique=True)

    __table_args__ = (
        Index('ix_shipping_zone_districts_zone_id', 'zone_id'),
    )


class ShippingRateGroup(Base):
    __tablename__ = 'shipping_rate_groups'

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    zone_id: Mapped[int] = mapped_column(ForeignKey('shipping_zones.id', ondelete='CASCADE'))
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Lower order = shown / evaluated first
    order: Mapped[int] = mapped_column("order", Integer, default=0)
    active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (
        Index('ix_shipping_rate_groups_zone_active', 'zone_id', 'active'),
    )


class ShippingRate(Base):
    __tablename__ = 'shipping_rates'

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(ForeignKey('shipping_rate_groups.id', ondelete='CASCADE'))
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    base_cost: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), default=Decimal("0"))
    # Subtotal window; NULL min = 0, NULL max = unbounded
    min_order_amount: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2), nullable=True)
    max_order_amount: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2), nullable=True)
    free_shipping_min: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2), nullable=True)
    estimated_days: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)  # e.g. "2 días", "24 horas"
    carrier: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    time_window: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)  # e.g. "9am-6pm"
    order: Mapped[int] = mapped_column("order", Integer, default=0)
    active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (
        Index('ix_shipping_rates_group_active', 'group_id', 'active'),
    )
