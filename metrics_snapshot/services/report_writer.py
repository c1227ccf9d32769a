import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from metrics_snapshot.models.metrics import SystemMetrics

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Timestamp",
    "CPUCount",
    "CPUUsage",
    "MemoryUsage",
    "MemoryTotal",
    "MemoryFree",
    "MemoryUsed",
    "DiskUsage",
    "DiskTotal",
    "DiskFree",
    "DiskUsed",
]

REPORTS_DIR_MODE = 0o755

_FILENAME_TIME_FORMAT = "%Y-%m-%d_%H%M%S"


def report_path(directory: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """Return ``<directory>/metrics_<YYYY-MM-DD_HHMMSS>.csv`` for the given moment."""
    now = now or datetime.now()
    return Path(directory) / f"metrics_{now.strftime(_FILENAME_TIME_FORMAT)}.csv"


def format_rfc3339(moment: datetime) -> str:
    """
    Format a datetime as RFC 3339 with second precision.

    UTC is rendered with a trailing ``Z``, any other offset as ``+HH:MM``.
    Naive datetimes are interpreted as local time.
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    if moment.utcoffset() == timezone.utc.utcoffset(None):
        return moment.strftime("%Y-%m-%dT%H:%M:%SZ")
    return moment.isoformat(timespec="seconds")


def format_row(metrics: SystemMetrics) -> List[str]:
    return [
        format_rfc3339(metrics.timestamp),
        str(metrics.cpu_count),
        f"{metrics.cpu_usage:f}",
        f"{metrics.memory_usage:f}",
        str(metrics.memory_total),
        str(metrics.memory_free),
        str(metrics.memory_used),
        f"{metrics.disk_usage:f}",
        str(metrics.disk_total),
        str(metrics.disk_free),
        str(metrics.disk_used),
    ]


def write_report(metrics: SystemMetrics, destination: Union[str, Path]) -> bool:
    """
    Write the snapshot as a header row plus one data row to ``destination``.

    The parent directory is created if needed and an existing file is
    truncated. Failures are logged and reported through the return value;
    this function never raises for filesystem errors.
    """
    destination = Path(destination)

    try:
        destination.parent.mkdir(mode=REPORTS_DIR_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Error creating reports directory %s: %s", destination.parent, exc)
        return False

    try:
        with destination.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh, lineterminator="\n")
            writer.writerow(CSV_HEADER)
            writer.writerow(format_row(metrics))
    except (OSError, csv.Error) as exc:
        logger.error("Error writing metrics file %s: %s", destination, exc)
        return False

    logger.info("Metrics written to %s", destination)
    return True
