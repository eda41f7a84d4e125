"""FastAPI application entry point.

Serves the same-origin proxies the dashboard clients need:
- `/api/{path}`: brokerage API proxy
- `/csv-proxy/{path}`: export CSV proxy
- `/health`: liveness

Run with any ASGI server, e.g. `uvicorn t212_dashboard.main:app`.
"""

from fastapi import FastAPI

from t212_dashboard.core.config import settings
from t212_dashboard.presentation.routers import (
    api_proxy_router,
    csv_proxy_router,
    system_router,
)

app = FastAPI(
    title=settings.app_name,
    description="Trading212 export proxy and portfolio analytics",
    version=settings.app_version,
    debug=settings.debug,
)

app.include_router(system_router)
app.include_router(api_proxy_router)
app.include_router(csv_proxy_router)
