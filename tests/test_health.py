"""
Tests for health check endpoints.
"""
from unittest.mock import patch

from meshcoord import __version__
from meshcoord.health import HealthChecker


def test_health_liveness(client):
    """Test liveness health check."""
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "meshcoord"
    assert data["version"] == __version__
    assert data["timestamp"].endswith("Z")


def test_health_readiness(client):
    """Test readiness health check."""
    r = client.get("/health/ready")
    # Should be 200 (ready) or 503 (not ready)
    assert r.status_code in [200, 503]
    data = r.json()
    assert data["service"] == "meshcoord"
    assert "checks" in data
    assert data["checks"]["stores"] == {"status": "ok", "events": 0, "nodes": 0, "active_nodes": 0}


def test_readiness_reports_store_sizes(client, server, make_event, make_node):
    server.log_event(make_event())
    server.log_event(make_event())
    server.register_node(make_node("n1"))
    server.register_node(make_node("n2"))
    server.mark_node_inactive("n2")

    stores = client.get("/health/ready").json()["checks"]["stores"]
    assert stores["events"] == 2
    assert stores["nodes"] == 2
    assert stores["active_nodes"] == 1


def test_readiness_fails_when_memory_is_exhausted(server):
    checker = HealthChecker(server, memory_threshold_mb=50.0)
    with patch("meshcoord.health.psutil.virtual_memory") as vm:
        vm.return_value.available = 10 * 1024**2
        vm.return_value.total = 1024**3
        vm.return_value.percent = 99.0

        result = checker.readiness()

    assert result["status"] == "not_ready"
    assert result["checks"]["memory"]["status"] == "error"


def test_readiness_endpoint_returns_503_when_not_ready(client):
    with patch("meshcoord.health.psutil.virtual_memory") as vm:
        vm.return_value.available = 0
        vm.return_value.total = 1024**3
        vm.return_value.percent = 100.0

        r = client.get("/health/ready")

    assert r.status_code == 503
    assert r.json()["status"] == "not_ready"


def test_memory_warning_does_not_fail_readiness(server):
    checker = HealthChecker(server, memory_threshold_mb=50.0)
    with patch("meshcoord.health.psutil.virtual_memory") as vm:
        vm.return_value.available = 75 * 1024**2
        vm.return_value.total = 1024**3
        vm.return_value.percent = 90.0

        result = checker.readiness()

    assert result["status"] == "ready"
    assert result["checks"]["memory"]["status"] == "warning"


def test_correlation_id_in_response(client):
    """Test that correlation ID is added to response headers."""
    r = client.get("/health")
    assert "x-correlation-id" in r.headers


def test_correlation_id_propagation(client):
    """Test that provided correlation ID is propagated."""
    correlation_id = "test-correlation-id-123"
    r = client.get("/health", headers={"x-correlation-id": correlation_id})
    assert r.headers["x-correlation-id"] == correlation_id
