"""
Health check route for monitoring.
"""

from fastapi import Response

from config import VERSION
from models import HealthResponse

from .app_state import app


@app.get("/health", response_model=HealthResponse)
async def health_check(response: Response):
    response.headers["Cache-Control"] = "no-cache"
    return HealthResponse(status="ok", version=VERSION)
