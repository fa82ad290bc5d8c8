"""
Rate eligibility: does a shipping rate apply to an order subtotal, and
what does it cost once free shipping is taken into account.

Pure functions, no database access. Inputs are ShippingRate rows (or any
object exposing the same attributes) and Decimal subtotals that were
validated by the caller.
"""
from decimal import Decimal
from typing import Any, Dict, Iterable, NamedTuple, Optional, Tuple

from shipping_backend.app.core.constants import ZERO


class OrderWindow(NamedTuple):
    """Closed subtotal interval [lower, upper]; upper=None means unbounded."""
    lower: Decimal
    upper: Optional[Decimal]

    def contains(self, subtotal: Decimal) -> bool:
        if subtotal < self.lower:
            return False
        if self.upper is not None and subtotal > self.upper:
            return False
        return True


def order_window(rate: Any) -> OrderWindow:
    """Resolve a rate's optional min/max into an explicit interval."""
    lower = rate.min_order_amount if rate.min_order_amount is not None else ZERO
    return OrderWindow(lower=lower, upper=rate.max_order_amount)


def apply_free_shipping(rate: Any, subtotal: Decimal) -> Tuple[Decimal, bool]:
    """
    Price a rate for a subtotal, ignoring its window.

    Returns (final_cost, is_free). A rate is free when it has a
    free_shipping_min and the subtotal reaches it.
    """
    is_free = rate.free_shipping_min is not None and subtotal >= rate.free_shipping_min
    return (ZERO if is_free else rate.base_cost), is_free


def evaluate(rate: Any, subtotal: Decimal, group: Any = None) -> Optional[Dict[str, Any]]:
    """
    Evaluate one rate against a subtotal.

    Returns None when the subtotal falls outside the rate's window,
    otherwise a priced option carrying the rate's descriptive fields and,
    when given, its group's identity.
    """
    if not order_window(rate).contains(subtotal):
        return None

    final_cost, is_free = apply_free_shipping(rate, subtotal)
    return {
        "id": rate.id,
        "name": rate.name,
        "description": rate.description,
        "base_cost": rate.base_cost,
        "final_cost": final_cost,
        "is_free": is_free,
        "estimated_days": rate.estimated_days,
        "carrier": rate.carrier,
        "time_window": rate.time_window,
        "group_id": group.id if group is not None else rate.group_id,
        "group_name": group.name if group is not None else None,
        "min_order_amount": rate.min_order_amount,
        "max_order_amount": rate.max_order_amount,
    }


def shortfall(rates: Iterable[Any], subtotal: Decimal) -> Optional[Decimal]:
    """
    Smallest amount the subtotal must grow by to enter some rate's window.

    Only rates whose minimum exceeds the subtotal count; None when there
    is no such rate (nothing to unlock by adding to the cart).
    """
    gaps = [
        rate.min_order_amount - subtotal
        for rate in rates
        if rate.min_order_amount is not None and rate.min_order_amount > subtotal
    ]
    return min(gaps) if gaps else None
