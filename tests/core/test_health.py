"""Tests for health check types."""

from config_center.core.health import Health


def test_health_defaults():
    health = Health(ok=True, store="ok")
    assert health.listening is False
    assert health.active_watches == 0
    assert health.errors == {}


def test_health_details():
    health = Health(
        ok=False,
        store="error: connection refused",
        listening=True,
        active_watches=2,
        errors={"/system_events": 3},
    )
    assert health.details == {
        "store": "error: connection refused",
        "listening": True,
        "active_watches": 2,
        "errors": {"/system_events": 3},
    }


def test_health_immutable():
    health = Health(ok=True, store="ok")
    try:
        health.active_watches = 5  # type: ignore
        assert False, "Should have raised"
    except AttributeError:
        pass
