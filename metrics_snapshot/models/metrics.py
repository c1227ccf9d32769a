from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SystemMetrics(BaseModel):
    """Immutable point-in-time snapshot of CPU, memory and disk utilisation."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="Capture moment (timezone-aware)")
    cpu_count: int = Field(..., ge=1, description="Number of logical CPU cores")
    cpu_usage: float = Field(
        ...,
        description="CPU utilisation in percent, averaged over a 1 second window",
    )

    memory_usage: float = Field(..., description="RAM usage in percent")
    memory_total: int = Field(..., ge=0, description="Total RAM in bytes")
    memory_free: int = Field(..., ge=0, description="Free RAM in bytes")
    memory_used: int = Field(..., ge=0, description="Used RAM in bytes")

    disk_usage: float = Field(..., description="Root filesystem usage in percent")
    disk_total: int = Field(..., ge=0, description="Root filesystem size in bytes")
    disk_free: int = Field(..., ge=0, description="Free bytes on the root filesystem")
    disk_used: int = Field(..., ge=0, description="Used bytes on the root filesystem")
