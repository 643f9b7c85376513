"""FastAPI application."""

from fastapi import FastAPI

from packpal.engine.api.routes.health import router as health_router
from packpal.engine.api.routes.metrics import router as metrics_router
from packpal.engine.api.routes.packing import router as packing_router
from packpal.engine.api.routes.weather import router as weather_router

app = FastAPI(title="PackPal Engine API", version="0.1.0")

app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(packing_router)
app.include_router(weather_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "PackPal Engine API", "version": "0.1.0"}
