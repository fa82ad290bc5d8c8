"""
Tests for the request metric endpoint label (core.metrics).
"""
from shipping_backend.app.core.metrics import _route_template


def test_route_template_restores_placeholder():
    assert _route_template("/shipping/rates/42/quote", {"rate_id": 42}) == "/shipping/rates/{rate_id}/quote"


def test_route_template_keeps_prefix_segment_with_same_value():
    # Only the last matching segment is the parameter
    assert _route_template("/locations/districts/150131", {"district_code": "150131"}) == (
        "/locations/districts/{district_code}"
    )
    assert _route_template("/a/7/b/7", {"item_id": 7}) == "/a/7/b/{item_id}"


def test_route_template_static_path_unchanged():
    assert _route_template("/shipping/options", {}) == "/shipping/options"
