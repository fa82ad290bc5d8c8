"""
Shipping resolution service.

One engine answers the three checkout questions about a district and a
subtotal:

- list_shipping_options: every eligible rate, grouped (checkout screen).
  Never invents a price; an unserved district is reported as such.
- estimate_shipping_cost: a single number for quick estimates. Always
  answers, falling back to configured defaults when nothing applies.
- check_coverage: whether the district has an active zone at all.

Zone lookup and catalog fetch are delegated to ZoneDirectory and
RateCatalog; pricing of individual rates to the eligibility module.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.core.constants import (
    MODE_COVERAGE,
    MODE_ESTIMATE,
    MODE_OPTIONS,
    MSG_NO_COVERAGE,
    MSG_NO_ELIGIBLE_OPTIONS,
    SOURCE_DEGRADED,
    SOURCE_FIRST_RATE,
    SOURCE_RATE,
    SOURCE_SYSTEM_DEFAULT,
    SOURCE_ZONE_DEFAULT,
    STATUS_NO_COVERAGE,
    STATUS_NO_ELIGIBLE_OPTIONS,
    STATUS_OK,
)
from shipping_backend.app.core.logging import get_logger
from shipping_backend.app.core.metrics import record_resolution
from shipping_backend.app.core.settings import Settings, get_settings
from shipping_backend.app.services import eligibility
from shipping_backend.app.services.rate_catalog import RateCatalog
from shipping_backend.app.services.shipping_errors import (
    InvalidInputError,
    RateNotFoundError,
    ResolutionFailure,
)
from shipping_backend.app.services.zone_directory import ZoneDirectory

logger = get_logger(__name__)


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def _option_to_dict(option: Dict[str, Any]) -> Dict[str, Any]:
    return {
        **option,
        "base_cost": float(option["base_cost"]),
        "final_cost": float(option["final_cost"]),
        "min_order_amount": _money(option["min_order_amount"]),
        "max_order_amount": _money(option["max_order_amount"]),
    }


class ShippingService:
    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or get_settings()
        self.zones = ZoneDirectory(session)
        self.catalog = RateCatalog(session)
        self._district_code_re = re.compile(self.settings.DISTRICT_CODE_PATTERN)

    # --- Input validation ---

    def _validate_district_code(self, district_code: Optional[str]) -> str:
        code = (district_code or "").strip()
        if not code or not self._district_code_re.match(code):
            raise InvalidInputError(f"Invalid district code: {district_code!r}")
        return code

    @staticmethod
    def _validate_subtotal(subtotal: Any) -> Decimal:
        try:
            value = subtotal if isinstance(subtotal, Decimal) else Decimal(str(subtotal))
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidInputError(f"Invalid subtotal: {subtotal!r}")
        if not value.is_finite():
            raise InvalidInputError(f"Invalid subtotal: {subtotal!r}")
        if value < 0:
            raise InvalidInputError("Subtotal must not be negative")
        return value

    # --- Mode A: all options ---

    async def list_shipping_options(self, district_code: str, subtotal: Any) -> Dict[str, Any]:
        """
        List every eligible shipping option for a district and subtotal.

        Returns:
            {
                "status": "ok" | "no_coverage" | "no_eligible_options",
                "zone": {"id": 1, "name": "Lima Metropolitana"} | None,
                "groups": [{"id", "name", "description", "rates": [...]}, ...],
                "shortfall": 49.0 | None,   # only for no_eligible_options
                "message": str | None,
            }

        Raises ResolutionFailure if the store cannot be read; an outage is
        never turned into "no coverage" or into a price.
        """
        code = self._validate_district_code(district_code)
        amount = self._validate_subtotal(subtotal)

        zone = await self.zones.find_zone_for_district(code)
        if zone is None:
            record_resolution(MODE_OPTIONS, STATUS_NO_COVERAGE)
            logger.info("Shipping options: no coverage", district_code=code)
            return {
                "status": STATUS_NO_COVERAGE,
                "zone": None,
                "groups": [],
                "shortfall": None,
                "message": MSG_NO_COVERAGE,
            }

        catalog = await self.catalog.rates_for_zone(zone.id)
        zone_info = {"id": zone.id, "name": zone.name}

        groups: List[Dict[str, Any]] = []
        for group, rates in catalog:
            options = [
                _option_to_dict(option)
                for option in (eligibility.evaluate(rate, amount, group) for rate in rates)
                if option is not None
            ]
            # Groups with nothing eligible are not shown
            if options:
                groups.append({
                    "id": group.id,
                    "name": group.name,
                    "description": group.description,
                    "rates": options,
                })

        if not groups:
            all_rates = [rate for _, rates in catalog for rate in rates]
            gap = eligibility.shortfall(all_rates, amount)
            record_resolution(MODE_OPTIONS, STATUS_NO_ELIGIBLE_OPTIONS)
            logger.info(
                "Shipping options: nothing eligible",
                district_code=code,
                zone_id=zone.id,
                subtotal=str(amount),
                shortfall=str(gap) if gap is not None else None,
            )
            return {
                "status": STATUS_NO_ELIGIBLE_OPTIONS,
                "zone": zone_info,
                "groups": [],
                "shortfall": _money(gap),
                "message": MSG_NO_ELIGIBLE_OPTIONS,
            }

        record_resolution(MODE_OPTIONS, STATUS_OK)
        return {
            "status": STATUS_OK,
            "zone": zone_info,
            "groups": groups,
            "shortfall": None,
            "message": None,
        }

    # --- Mode B: single representative cost ---

    def _system_default(self, source: str) -> Dict[str, Any]:
        return {
            "cost": float(self.settings.DEFAULT_SHIPPING_COST),
            "zone_name": self.settings.DEFAULT_ZONE_LABEL,
            "estimated_days": self.settings.DEFAULT_ESTIMATED_DAYS,
            "is_free": False,
            "rate_id": None,
            "source": source,
        }

    async def estimate_shipping_cost(self, district_code: str, subtotal: Any) -> Dict[str, Any]:
        """
        Quote one shipping cost for a district and subtotal.

        Selection, first match wins:
        1. no active zone            -> system default
        2. first eligible rate       (groups then rates, ascending order)
        3. nothing eligible          -> first rate of the first group, window ignored
        4. zone without active rates -> default cost, zone name kept
        Free shipping applies to whichever rate was picked.

        Store failures quote the system default (source="degraded") unless
        ESTIMATE_FALLBACK_ON_FAILURE is off, in which case they propagate.
        """
        code = self._validate_district_code(district_code)
        amount = self._validate_subtotal(subtotal)

        try:
            zone = await self.zones.find_zone_for_district(code)
            catalog = await self.catalog.rates_for_zone(zone.id) if zone is not None else []
        except ResolutionFailure as e:
            if not self.settings.ESTIMATE_FALLBACK_ON_FAILURE:
                raise
            record_resolution(MODE_ESTIMATE, SOURCE_DEGRADED)
            logger.error(
                "shipping_estimate_degraded",
                district_code=code,
                operation=e.operation,
            )
            return self._system_default(SOURCE_DEGRADED)

        if zone is None:
            record_resolution(MODE_ESTIMATE, SOURCE_SYSTEM_DEFAULT)
            logger.info("shipping_estimate_no_zone", district_code=code)
            return self._system_default(SOURCE_SYSTEM_DEFAULT)

        if not catalog:
            record_resolution(MODE_ESTIMATE, SOURCE_ZONE_DEFAULT)
            logger.info("Shipping estimate: zone has no active rates", district_code=code, zone_id=zone.id)
            return {
                "cost": float(self.settings.DEFAULT_SHIPPING_COST),
                "zone_name": zone.name,
                "estimated_days": self.settings.ZONE_DEFAULT_ESTIMATED_DAYS,
                "is_free": False,
                "rate_id": None,
                "source": SOURCE_ZONE_DEFAULT,
            }

        selected = None
        source = SOURCE_RATE
        for _, rates in catalog:
            selected = next((r for r in rates if eligibility.order_window(r).contains(amount)), None)
            if selected is not None:
                break
        if selected is None:
            selected = catalog[0][1][0]
            source = SOURCE_FIRST_RATE

        cost, is_free = eligibility.apply_free_shipping(selected, amount)
        record_resolution(MODE_ESTIMATE, source)
        return {
            "cost": float(cost),
            "zone_name": zone.name,
            "estimated_days": selected.estimated_days or self.settings.ZONE_DEFAULT_ESTIMATED_DAYS,
            "is_free": is_free,
            "rate_id": selected.id,
            "source": source,
        }

    # --- Coverage ---

    async def check_coverage(self, district_code: str) -> Dict[str, Any]:
        """Whether a district has an active zone, and which one."""
        code = self._validate_district_code(district_code)
        zone = await self.zones.find_zone_for_district(code)
        record_resolution(MODE_COVERAGE, "covered" if zone is not None else STATUS_NO_COVERAGE)
        return {
            "covered": zone is not None,
            "zone_id": zone.id if zone is not None else None,
            "zone_name": zone.name if zone is not None else None,
        }

    # --- Selected rate ---

    async def get_rate_details(self, rate_id: int) -> Dict[str, Any]:
        """Describe an active rate together with its group and zone."""
        found = await self.catalog.get_rate(rate_id)
        if found is None:
            raise RateNotFoundError(rate_id)
        rate, group, zone = found
        return {
            "id": rate.id,
            "name": rate.name,
            "description": rate.description,
            "base_cost": float(rate.base_cost),
            "min_order_amount": _money(rate.min_order_amount),
            "max_order_amount": _money(rate.max_order_amount),
            "free_shipping_min": _money(rate.free_shipping_min),
            "estimated_days": rate.estimated_days,
            "carrier": rate.carrier,
            "time_window": rate.time_window,
            "group": {"id": group.id, "name": group.name},
            "zone": {"id": zone.id, "name": zone.name},
        }

    async def quote_rate(self, rate_id: int, subtotal: Any) -> Dict[str, Any]:
        """
        Price the rate a customer selected at checkout.

        `eligible` is False when the subtotal has moved outside the rate's
        window since the options were listed; the caller decides whether to
        reject the selection.
        """
        amount = self._validate_subtotal(subtotal)
        found = await self.catalog.get_rate(rate_id)
        if found is None:
            raise RateNotFoundError(rate_id)
        rate = found[0]
        cost, is_free = eligibility.apply_free_shipping(rate, amount)
        return {
            "rate_id": rate.id,
            "cost": float(cost),
            "base_cost": float(rate.base_cost),
            "is_free": is_free,
            "free_shipping_min": _money(rate.free_shipping_min),
            "eligible": eligibility.order_window(rate).contains(amount),
        }
