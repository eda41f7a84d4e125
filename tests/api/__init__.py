"""API tests package.

End-to-end tests for the proxy and system endpoints using TestClient.
Upstream hosts (brokerage API, object storage) are mocked with
pytest-httpx.
"""
