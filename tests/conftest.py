from datetime import datetime, timezone

import pytest

from metrics_snapshot.config import get_settings
from metrics_snapshot.models.metrics import SystemMetrics

ENV_VARS = (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASSWORD",
    "SMTP_FROM",
    "SMTP_TO",
    "SMTP_TIMEOUT",
    "DIRECTORY_PATH",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable Settings.from_env reads from the process environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def stub_metrics() -> SystemMetrics:
    return SystemMetrics(
        timestamp=datetime(2024, 5, 1, 12, 30, 45, tzinfo=timezone.utc),
        cpu_count=4,
        cpu_usage=12.5,
        memory_usage=40.0,
        memory_total=1000,
        memory_free=600,
        memory_used=400,
        disk_usage=55.0,
        disk_total=2000,
        disk_free=900,
        disk_used=1100,
    )
