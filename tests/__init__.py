"""Test suite for t212_dashboard.

Test structure follows the test pyramid:
- unit/: Domain, application and adapter logic in isolation
- integration/: HTTP clients against pytest-httpx mocked transports
- api/: Proxy and system endpoints through FastAPI's TestClient
"""
