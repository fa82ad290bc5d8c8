"""
Tests for the public shipping API.

Tests cover:
- /shipping/options, /shipping/estimate, /shipping/coverage
- selected rate details and quotes
- HTTP mapping of invalid input, unknown rates and store failures
- /health and /metrics
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.api.deps import get_session
from shipping_backend.app.main import app
from shipping_backend.app.models.shipping import ShippingZone
from shipping_backend.tests.factories import (
    LIMA_DISTRICT,
    UNCOVERED_DISTRICT,
    FailingSession,
    create_group,
    create_rate,
    create_zone,
)


@pytest.fixture
def failing_store():
    """Route every request to a session whose database is down."""
    async def override_get_session():
        yield FailingSession()

    app.dependency_overrides[get_session] = override_get_session
    yield
    app.dependency_overrides.pop(get_session, None)


# ============================================
# OPTIONS
# ============================================

@pytest.mark.asyncio
async def test_options_lists_eligible_rates(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get(
        "/shipping/options",
        params={"district_code": LIMA_DISTRICT, "subtotal": "80"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["zone"] == {"id": lima_zone.id, "name": "Lima Metropolitana"}
    assert len(data["groups"]) == 1
    rates = data["groups"][0]["rates"]
    assert [r["name"] for r in rates] == ["Rate A"]
    assert rates[0]["final_cost"] == 15.0
    assert rates[0]["is_free"] is False
    assert rates[0]["time_window"] == "9am-6pm"
    assert data["shortfall"] is None


@pytest.mark.asyncio
async def test_options_free_shipping_at_threshold(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get(
        "/shipping/options",
        params={"district_code": LIMA_DISTRICT, "subtotal": "150"},
    )

    assert response.status_code == 200
    rates = response.json()["groups"][0]["rates"]
    by_name = {r["name"]: r for r in rates}
    assert set(by_name) == {"Rate A", "Rate B"}
    assert by_name["Rate A"]["final_cost"] == 15.0
    assert by_name["Rate B"]["final_cost"] == 0.0
    assert by_name["Rate B"]["is_free"] is True
    assert by_name["Rate B"]["base_cost"] == 15.0


@pytest.mark.asyncio
async def test_options_no_coverage(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get(
        "/shipping/options",
        params={"district_code": UNCOVERED_DISTRICT, "subtotal": "80"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "no_coverage"
    assert data["zone"] is None
    assert data["groups"] == []
    assert data["message"]


@pytest.mark.asyncio
async def test_options_no_eligible_reports_shortfall(client: AsyncClient, test_session: AsyncSession):
    zone = await create_zone(test_session, "Lima Metropolitana", [LIMA_DISTRICT])
    group = await create_group(test_session, zone, "Standard")
    await create_rate(test_session, group, "Minimum 100", base_cost=10, min_order_amount=100)
    await test_session.commit()

    response = await client.get(
        "/shipping/options",
        params={"district_code": LIMA_DISTRICT, "subtotal": "51"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "no_eligible_options"
    assert data["zone"]["name"] == "Lima Metropolitana"
    assert data["groups"] == []
    assert data["shortfall"] == 49.0


@pytest.mark.asyncio
async def test_options_negative_subtotal_rejected(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get(
        "/shipping/options",
        params={"district_code": LIMA_DISTRICT, "subtotal": "-1"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_options_malformed_district_rejected(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get(
        "/shipping/options",
        params={"district_code": "15-01", "subtotal": "80"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_options_non_numeric_subtotal_rejected(client: AsyncClient):
    response = await client.get(
        "/shipping/options",
        params={"district_code": LIMA_DISTRICT, "subtotal": "abc"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_options_store_failure_is_503(client: AsyncClient, failing_store):
    response = await client.get(
        "/shipping/options",
        params={"district_code": LIMA_DISTRICT, "subtotal": "80"},
    )

    assert response.status_code == 503
    assert response.json()["detail"] == "Error al cargar opciones de envío"


# ============================================
# ESTIMATE
# ============================================

@pytest.mark.asyncio
async def test_estimate_first_eligible_rate(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get(
        "/shipping/estimate",
        params={"district_code": LIMA_DISTRICT, "subtotal": "80"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["cost"] == 15.0
    assert data["zone_name"] == "Lima Metropolitana"
    assert data["estimated_days"] == "2 días"
    assert data["is_free"] is False
    assert data["source"] == "rate"


@pytest.mark.asyncio
async def test_estimate_uncovered_district_quotes_default(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get(
        "/shipping/estimate",
        params={"district_code": UNCOVERED_DISTRICT, "subtotal": "80"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["cost"] == 20.0
    assert data["zone_name"] == "Envío nacional"
    assert data["estimated_days"] == "5-7 días"
    assert data["rate_id"] is None
    assert data["source"] == "system_default"


@pytest.mark.asyncio
async def test_estimate_store_failure_degrades(client: AsyncClient, failing_store):
    response = await client.get(
        "/shipping/estimate",
        params={"district_code": LIMA_DISTRICT, "subtotal": "80"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["cost"] == 20.0
    assert data["source"] == "degraded"


# ============================================
# COVERAGE
# ============================================

@pytest.mark.asyncio
async def test_coverage_covered(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get("/shipping/coverage", params={"district_code": LIMA_DISTRICT})

    assert response.status_code == 200
    assert response.json() == {
        "covered": True,
        "zone_id": lima_zone.id,
        "zone_name": "Lima Metropolitana",
    }


@pytest.mark.asyncio
async def test_coverage_not_covered(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get("/shipping/coverage", params={"district_code": UNCOVERED_DISTRICT})

    assert response.status_code == 200
    assert response.json()["covered"] is False


@pytest.mark.asyncio
async def test_coverage_store_failure_is_503(client: AsyncClient, failing_store):
    response = await client.get("/shipping/coverage", params={"district_code": LIMA_DISTRICT})

    assert response.status_code == 503


# ============================================
# SELECTED RATE
# ============================================

@pytest.mark.asyncio
async def test_rate_details(client: AsyncClient, test_session: AsyncSession):
    zone = await create_zone(test_session, "Lima Metropolitana", [LIMA_DISTRICT])
    group = await create_group(test_session, zone, "Courier")
    rate = await create_rate(
        test_session, group, "Olva", base_cost=20, free_shipping_min=699, carrier="Olva",
    )
    await test_session.commit()

    response = await client.get(f"/shipping/rates/{rate.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Olva"
    assert data["base_cost"] == 20.0
    assert data["free_shipping_min"] == 699.0
    assert data["group"] == {"id": group.id, "name": "Courier"}
    assert data["zone"] == {"id": zone.id, "name": "Lima Metropolitana"}


@pytest.mark.asyncio
async def test_rate_details_unknown_rate(client: AsyncClient):
    response = await client.get("/shipping/rates/9999")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_rate_details_inactive_rate_hidden(client: AsyncClient, test_session: AsyncSession):
    zone = await create_zone(test_session, "Lima Metropolitana", [LIMA_DISTRICT])
    group = await create_group(test_session, zone, "Standard")
    rate = await create_rate(test_session, group, "Retired", active=False)
    await test_session.commit()

    response = await client.get(f"/shipping/rates/{rate.id}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_quote_rate_free_above_threshold(client: AsyncClient, test_session: AsyncSession):
    zone = await create_zone(test_session, "Lima Metropolitana", [LIMA_DISTRICT])
    group = await create_group(test_session, zone, "Courier")
    rate = await create_rate(test_session, group, "Olva", base_cost=20, free_shipping_min=699)
    await test_session.commit()

    response = await client.get(f"/shipping/rates/{rate.id}/quote", params={"subtotal": "700"})

    assert response.status_code == 200
    assert response.json() == {
        "rate_id": rate.id,
        "cost": 0.0,
        "base_cost": 20.0,
        "is_free": True,
        "free_shipping_min": 699.0,
        "eligible": True,
    }


@pytest.mark.asyncio
async def test_quote_rate_outside_window(client: AsyncClient, lima_zone: ShippingZone):
    options = await client.get(
        "/shipping/options",
        params={"district_code": LIMA_DISTRICT, "subtotal": "80"},
    )
    rate_a = options.json()["groups"][0]["rates"][0]

    response = await client.get(f"/shipping/rates/{rate_a['id']}/quote", params={"subtotal": "200"})

    assert response.status_code == 200
    data = response.json()
    assert data["cost"] == 15.0
    assert data["eligible"] is False


@pytest.mark.asyncio
async def test_quote_rate_negative_subtotal(client: AsyncClient, lima_zone: ShippingZone):
    response = await client.get("/shipping/rates/1/quote", params={"subtotal": "-5"})

    assert response.status_code == 400


# ============================================
# HEALTH / METRICS
# ============================================

@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"] == "ok"


@pytest.mark.asyncio
async def test_health_check_database_down(client: AsyncClient, failing_store):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["checks"]["database"].startswith("error:")


@pytest.mark.asyncio
async def test_metrics_exposes_resolution_counters(client: AsyncClient, lima_zone: ShippingZone):
    await client.get("/shipping/options", params={"district_code": LIMA_DISTRICT, "subtotal": "80"})

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "shipping_resolutions_total" in response.text
    assert 'endpoint="/shipping/options"' in response.text


@pytest.mark.asyncio
async def test_metrics_label_uses_prefixed_route_template(client: AsyncClient):
    await client.get("/shipping/rates/777")

    response = await client.get("/metrics")

    assert 'endpoint="/shipping/rates/{rate_id}"' in response.text
    assert 'endpoint="/rates/{rate_id}"' not in response.text
    assert 'endpoint="/shipping/rates/777"' not in response.text
