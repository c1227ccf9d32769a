import logging
from datetime import datetime

import psutil

from metrics_snapshot.errors import SamplingError
from metrics_snapshot.models.metrics import SystemMetrics

logger = logging.getLogger(__name__)

# CPU usage is averaged over this window; psutil blocks for its duration.
CPU_SAMPLING_INTERVAL_SECONDS = 1.0

ROOT_MOUNTPOINT = "/"


def sample() -> SystemMetrics:
    """
    Take one snapshot of CPU, memory and root filesystem usage.

    This function encapsulates all direct calls to psutil. It blocks for
    CPU_SAMPLING_INTERVAL_SECONDS while psutil measures CPU utilisation across
    all cores. If any of the queries fails, SamplingError is raised and no
    partial snapshot is returned.
    """
    try:
        cpu_usage = psutil.cpu_percent(interval=CPU_SAMPLING_INTERVAL_SECONDS)
        cpu_count = psutil.cpu_count(logical=True)
        memory = psutil.virtual_memory()
        disk = psutil.disk_usage(ROOT_MOUNTPOINT)
    except (psutil.Error, OSError) as exc:
        raise SamplingError(f"Could not query host metrics: {exc}") from exc

    if not cpu_count:
        raise SamplingError("Could not determine the number of logical CPUs")

    metrics = SystemMetrics(
        timestamp=datetime.now().astimezone(),
        cpu_count=cpu_count,
        cpu_usage=cpu_usage,
        memory_usage=memory.percent,
        memory_total=memory.total,
        memory_free=memory.free,
        memory_used=memory.used,
        disk_usage=disk.percent,
        disk_total=disk.total,
        disk_free=disk.free,
        disk_used=disk.used,
    )
    logger.debug("Sampled %s", metrics)
    return metrics
