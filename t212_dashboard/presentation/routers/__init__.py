"""Routers mounted by the application.

Proxy routers are thin forwarding layers: no business logic, no state.
"""

from t212_dashboard.presentation.routers.api_proxy import api_proxy_router
from t212_dashboard.presentation.routers.csv_proxy import csv_proxy_router
from t212_dashboard.presentation.routers.system import system_router

__all__ = ["api_proxy_router", "csv_proxy_router", "system_router"]
