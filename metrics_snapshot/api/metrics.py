from fastapi import APIRouter, HTTPException

from metrics_snapshot.errors import SamplingError
from metrics_snapshot.models.metrics import SystemMetrics
from metrics_snapshot.services import sampler

router = APIRouter()


@router.get("/snapshot", response_model=SystemMetrics, summary="Metrics snapshot")
def snapshot() -> SystemMetrics:
    """
    Sample the host and return a fresh SystemMetrics snapshot.

    The handler is synchronous because sampling blocks for the CPU window;
    FastAPI runs it in its threadpool. If the host cannot be queried, a HTTP
    503 Service Unavailable is returned with the error in ``detail``.
    """
    try:
        return sampler.sample()
    except SamplingError as exc:
        raise HTTPException(
            status_code=503,
            detail=str(exc),
        ) from exc
