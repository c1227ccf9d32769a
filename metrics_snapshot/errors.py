class MetricsSnapshotError(Exception):
    """Base class for errors raised by metrics_snapshot."""


class SamplingError(MetricsSnapshotError):
    """Raised when the host could not be queried for a complete snapshot."""


class ConfigurationError(MetricsSnapshotError):
    """Raised when the environment holds invalid settings (e.g. SMTP_PORT)."""
