"""API tests for the brokerage API proxy and the CSV proxy.

The app is driven through TestClient; upstream hosts are mocked with
pytest-httpx (only the routers' outbound AsyncClient is intercepted).
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from t212_dashboard.core.config import settings
from t212_dashboard.main import app
from t212_dashboard.presentation.routers.csv_proxy import resolve_storage_url

client = TestClient(app)

UPSTREAM = settings.upstream_api_base_url
STORAGE = settings.csv_storage_base_url
CSV_BODY = "Action,Time,Total\nDeposit,2023-01-01 10:00:00,100\n"


def assert_cors(response) -> None:
    assert response.headers["Access-Control-Allow-Origin"] == settings.cors_allow_origin
    assert "Authorization" in response.headers["Access-Control-Allow-Headers"]


# =============================================================================
# Brokerage API proxy
# =============================================================================


class TestApiProxy:
    def test_preflight(self):
        response = client.options("/api/equity/history/exports")

        assert response.status_code == 200
        assert response.headers["Access-Control-Max-Age"] == "86400"
        assert_cors(response)

    def test_forwards_get_with_query_and_authorization(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{UPSTREAM}/equity/account/cash?cursor=5",
            json={"free": 10},
        )

        response = client.get(
            "/api/equity/account/cash?cursor=5",
            headers={"Authorization": "api-key-123"},
        )

        assert response.status_code == 200
        assert response.json() == {"free": 10}
        assert response.headers["content-type"].startswith("application/json")
        assert_cors(response)
        upstream = httpx_mock.get_request()
        assert upstream.headers["Authorization"] == "api-key-123"
        assert upstream.headers["User-Agent"].startswith("T212-Dashboard")

    def test_forwards_post_body(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{UPSTREAM}/equity/history/exports",
            json={"reportId": 7},
        )

        response = client.post(
            "/api/equity/history/exports",
            content=b'{"timeFrom": "2023-01-01T00:00:00Z"}',
            headers={"Authorization": "k", "Content-Type": "application/json"},
        )

        assert response.json() == {"reportId": 7}
        assert httpx_mock.get_request().content == b'{"timeFrom": "2023-01-01T00:00:00Z"}'

    def test_upstream_status_is_passed_through(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{UPSTREAM}/equity/history/exports",
            status_code=429,
            json={"code": "TooManyRequests"},
        )

        response = client.post("/api/equity/history/exports", content=b"{}")

        assert response.status_code == 429
        assert_cors(response)

    def test_unreachable_upstream_returns_500(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        response = client.get("/api/equity/account/cash")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Proxy error",
            "message": "connection refused",
        }
        assert_cors(response)


# =============================================================================
# CSV proxy
# =============================================================================


class TestCsvProxy:
    def test_preflight(self):
        response = client.options("/csv-proxy/exports/1.csv")

        assert response.status_code == 200
        assert response.headers["Access-Control-Max-Age"] == "86400"

    def test_path_segment_with_signed_query(self, httpx_mock):
        httpx_mock.add_response(
            url=f"{STORAGE}/exports/1.csv?X-Amz-Signature=abc",
            text=CSV_BODY,
        )

        response = client.get("/csv-proxy/exports/1.csv?X-Amz-Signature=abc")

        assert response.status_code == 200
        assert response.text == CSV_BODY
        assert response.headers["content-type"].startswith("text/csv")
        assert_cors(response)

    def test_encoded_segment_is_decoded_once(self, httpx_mock):
        httpx_mock.add_response(url=f"{STORAGE}/exports/a%20b.csv", text=CSV_BODY)

        response = client.get("/csv-proxy/exports%2Fa%2520b.csv")

        assert response.status_code == 200
        assert httpx_mock.get_request().url.path == "/exports/a b.csv"

    def test_path_query_parameter(self, httpx_mock):
        httpx_mock.add_response(url=f"{STORAGE}/exports/2.csv", text=CSV_BODY)

        response = client.get("/csv-proxy", params={"path": "exports/2.csv"})

        assert response.status_code == 200
        assert response.text == CSV_BODY

    def test_full_storage_url(self, httpx_mock):
        httpx_mock.add_response(url=f"{STORAGE}/exports/3.csv?sig=1", text=CSV_BODY)

        response = client.get(
            "/csv-proxy", params={"path": f"{STORAGE}/exports/3.csv?sig=1"}
        )

        assert response.status_code == 200

    def test_referer_fallback(self, httpx_mock):
        httpx_mock.add_response(url=f"{STORAGE}/exports/4.csv?sig=2", text=CSV_BODY)

        response = client.get(
            "/csv-proxy",
            headers={"Referer": "http://localhost:8000/csv-proxy/exports/4.csv?sig=2"},
        )

        assert response.status_code == 200

    def test_foreign_host_is_rejected(self):
        response = client.get(
            "/csv-proxy", params={"path": "https://evil.example.com/x.csv"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "CSV proxy error",
            "message": "Host not allowed: evil.example.com",
        }

    def test_missing_path(self):
        response = client.get("/csv-proxy")

        assert response.status_code == 400
        assert response.json()["message"] == "No CSV path provided"

    def test_storage_error_status_is_passed_through(self, httpx_mock):
        httpx_mock.add_response(
            url=f"{STORAGE}/exports/expired.csv", status_code=403, text="<Error/>"
        )

        response = client.get("/csv-proxy/exports/expired.csv")

        assert response.status_code == 403
        assert response.headers["content-type"].startswith("text/csv")

    def test_unreachable_storage_returns_500(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectTimeout("timed out"))

        response = client.get("/csv-proxy/exports/1.csv")

        assert response.status_code == 500
        assert response.json()["error"] == "CSV proxy error"


@pytest.mark.parametrize(
    ("target", "query", "expected"),
    [
        ("exports/1.csv", "", f"{STORAGE}/exports/1.csv"),
        ("/exports/1.csv", "sig=1", f"{STORAGE}/exports/1.csv?sig=1"),
        (f"{STORAGE}/k.csv?sig=9", "sig=1", f"{STORAGE}/k.csv?sig=9"),
    ],
)
def test_resolve_storage_url(target, query, expected):
    assert resolve_storage_url(target, query).value == expected
