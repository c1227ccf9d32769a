from types import SimpleNamespace

import psutil
import pytest
from pydantic import ValidationError

from metrics_snapshot.errors import SamplingError
from metrics_snapshot.models.metrics import SystemMetrics
from metrics_snapshot.services import sampler


def test_sample_structure_and_ranges():
    metrics = sampler.sample()

    assert isinstance(metrics, SystemMetrics)
    assert metrics.cpu_count >= 1
    assert metrics.timestamp.tzinfo is not None

    # Value ranges (soft sanity checks, not hard performance tests)
    assert 0.0 <= metrics.cpu_usage <= 100.0
    assert 0.0 <= metrics.memory_usage <= 100.0
    assert 0.0 <= metrics.disk_usage <= 100.0
    assert metrics.memory_total > 0
    assert metrics.disk_total > 0


@pytest.fixture
def fake_psutil(monkeypatch):
    calls = {}

    def fake_cpu_percent(interval=None):
        calls["interval"] = interval
        return 12.5

    def fake_disk_usage(path):
        calls["mountpoint"] = path
        return SimpleNamespace(percent=55.0, total=2000, free=900, used=1100)

    monkeypatch.setattr(sampler.psutil, "cpu_percent", fake_cpu_percent)
    monkeypatch.setattr(sampler.psutil, "cpu_count", lambda logical=True: 4)
    monkeypatch.setattr(
        sampler.psutil,
        "virtual_memory",
        lambda: SimpleNamespace(percent=40.0, total=1000, free=600, used=400),
    )
    monkeypatch.setattr(sampler.psutil, "disk_usage", fake_disk_usage)
    return calls


def test_sample_maps_psutil_values(fake_psutil):
    metrics = sampler.sample()

    assert fake_psutil == {"interval": 1.0, "mountpoint": "/"}
    assert metrics.cpu_count == 4
    assert metrics.cpu_usage == 12.5
    assert metrics.memory_usage == 40.0
    assert (metrics.memory_total, metrics.memory_free, metrics.memory_used) == (1000, 600, 400)
    assert metrics.disk_usage == 55.0
    assert (metrics.disk_total, metrics.disk_free, metrics.disk_used) == (2000, 900, 1100)


def test_sample_is_immutable(fake_psutil):
    metrics = sampler.sample()

    with pytest.raises(ValidationError):
        metrics.cpu_usage = 99.0


def test_disk_failure_aborts_sample(fake_psutil, monkeypatch):
    def broken_disk_usage(path):
        raise FileNotFoundError(path)

    monkeypatch.setattr(sampler.psutil, "disk_usage", broken_disk_usage)

    with pytest.raises(SamplingError) as excinfo:
        sampler.sample()
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_psutil_error_aborts_sample(fake_psutil, monkeypatch):
    def denied():
        raise psutil.AccessDenied()

    monkeypatch.setattr(sampler.psutil, "virtual_memory", denied)

    with pytest.raises(SamplingError):
        sampler.sample()


def test_unknown_cpu_count_aborts_sample(fake_psutil, monkeypatch):
    monkeypatch.setattr(sampler.psutil, "cpu_count", lambda logical=True: None)

    with pytest.raises(SamplingError, match="logical CPUs"):
        sampler.sample()
