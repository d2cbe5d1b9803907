"""
Tests for the Prometheus metrics middleware.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.metrics_middleware import UNMATCHED_ENDPOINT, PrometheusMiddleware


def build_app(recorded):
    """Small app whose middleware records what it would track."""

    def track(method, endpoint, status_code, duration):
        recorded.append((method, endpoint, status_code))

    app = FastAPI()
    app.add_middleware(PrometheusMiddleware, track_func=track)

    @app.get("/api/orders/{order_id}")
    async def read(order_id: int):
        return {"order_id": order_id}

    return app


class TestPrometheusMiddleware:
    """Test endpoint labelling."""

    def test_route_template_used_as_label(self):
        recorded = []
        with TestClient(build_app(recorded)) as client:
            client.get("/api/orders/5")
            client.get("/api/orders/6")

        assert recorded == [
            ("GET", "/api/orders/{order_id}", 200),
            ("GET", "/api/orders/{order_id}", 200),
        ]

    def test_unmatched_paths_share_one_label(self):
        recorded = []
        with TestClient(build_app(recorded)) as client:
            client.get("/does-not-exist")
            client.get("/wp-admin/setup.php")

        assert recorded == [
            ("GET", UNMATCHED_ENDPOINT, 404),
            ("GET", UNMATCHED_ENDPOINT, 404),
        ]
