"""Tests for the Adapt API client with mocked httpx."""

import httpx
import pytest
import respx

from carbonwidget.errors import FailureKind, TransportFailure
from carbonwidget.ingest.adapt_client import AdaptClient

URL = "https://test-adapt.example.com/api/v2/forecasts"


@pytest.fixture
def adapt() -> AdaptClient:
    return AdaptClient(base_url="https://test-adapt.example.com/", api_key="k3y")


class TestGetForecastsBody:
    @respx.mock
    def test_success(self, adapt: AdaptClient, forecast_fr: dict):
        respx.get(URL).mock(return_value=httpx.Response(200, json=forecast_fr))
        body = adapt.get_forecasts_body("fr")
        assert b'"levelScore"' in body

    @respx.mock
    def test_query_and_auth_header(self, adapt: AdaptClient, forecast_fr: dict):
        route = respx.get(URL).mock(return_value=httpx.Response(200, json=forecast_fr))
        adapt.get_forecasts_body("be")
        request = route.calls[0].request
        assert request.url.params["location"] == "be"
        assert request.url.params["limit"] == "72"
        assert request.headers["X-AUTH-TOKEN"] == "k3y"

    @respx.mock
    def test_empty_api_key_still_sent(self, forecast_fr: dict):
        route = respx.get(URL).mock(return_value=httpx.Response(200, json=forecast_fr))
        AdaptClient(base_url="https://test-adapt.example.com").get_forecasts_body("fr")
        assert route.calls[0].request.headers["X-AUTH-TOKEN"] == ""

    @respx.mock
    def test_server_error(self, adapt: AdaptClient):
        respx.get(URL).mock(return_value=httpx.Response(500))
        with pytest.raises(TransportFailure) as exc:
            adapt.get_forecasts_body("fr")
        assert exc.value.status_code == 500
        assert exc.value.kind == FailureKind.TRANSPORT

    @respx.mock
    def test_connect_error(self, adapt: AdaptClient):
        respx.get(URL).mock(side_effect=httpx.ConnectError("dns failure"))
        with pytest.raises(TransportFailure, match="dns failure"):
            adapt.get_forecasts_body("fr")

    @respx.mock
    def test_empty_body(self, adapt: AdaptClient):
        respx.get(URL).mock(return_value=httpx.Response(200, content=b""))
        with pytest.raises(TransportFailure, match="Empty"):
            adapt.get_forecasts_body("fr")

    @respx.mock
    def test_no_retry(self, adapt: AdaptClient):
        route = respx.get(URL).mock(return_value=httpx.Response(503))
        with pytest.raises(TransportFailure):
            adapt.get_forecasts_body("fr")
        assert route.call_count == 1
