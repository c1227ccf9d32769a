from fastapi import FastAPI

from .api import health, metrics

app = FastAPI(title="Metrics Snapshot")

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(metrics.router, prefix="/metrics", tags=["metrics"])
