"""
Shared constants for the shipping backend.
"""
from decimal import Decimal

# ---------------------------------------------------------------------------
# Decimal helper
# ---------------------------------------------------------------------------
ZERO = Decimal("0")

# ---------------------------------------------------------------------------
# Query modes (metric labels)
# ---------------------------------------------------------------------------
MODE_OPTIONS = "options"
MODE_ESTIMATE = "estimate"
MODE_COVERAGE = "coverage"

# ---------------------------------------------------------------------------
# Outcomes of list_shipping_options
# ---------------------------------------------------------------------------
STATUS_OK = "ok"
STATUS_NO_COVERAGE = "no_coverage"
STATUS_NO_ELIGIBLE_OPTIONS = "no_eligible_options"

# ---------------------------------------------------------------------------
# Where an estimate came from (estimate_shipping_cost)
# ---------------------------------------------------------------------------
SOURCE_RATE = "rate"                    # first eligible rate
SOURCE_FIRST_RATE = "first_rate"        # nothing eligible, first rate of first group
SOURCE_ZONE_DEFAULT = "zone_default"    # zone exists, no active rates
SOURCE_SYSTEM_DEFAULT = "system_default"  # district has no active zone
SOURCE_DEGRADED = "degraded"            # store failed, default quoted

# Customer-facing messages (storefront is Spanish-speaking)
MSG_NO_COVERAGE = "No tenemos cobertura de envío en tu distrito aún"
MSG_NO_ELIGIBLE_OPTIONS = "No hay opciones de envío disponibles para tu pedido"
