"""Tests for the HexaRate HTTP client."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from src.domain.errors import PersistenceError
from src.domain.models.accounts import Currency
from src.infrastructure import hexarate_client
from src.infrastructure.hexarate_client import HexaRateClient


def _response(status_code=200, payload=None, invalid_json=False):
    response = MagicMock()
    response.status_code = status_code
    if invalid_json:
        response.json.side_effect = ValueError("bad json")
    else:
        response.json.return_value = payload
    return response


def test_fetch_rate_reads_mid_rate(monkeypatch):
    """The mid rate should be parsed from the data envelope."""
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return _response(payload={"status_code": 200, "data": {"mid": 1.1685}})

    monkeypatch.setattr(hexarate_client.requests, "get", fake_get)
    client = HexaRateClient("http://rates.local/", timeout=3, logger=MagicMock())

    rate = client.fetch_rate(Currency.GBP, Currency.EUR, "2024-01-31")

    assert rate == Decimal("1.1685")
    url, kwargs = calls[0]
    assert url == "http://rates.local/api/rates/GBP/EUR/2024-01-31"
    assert kwargs["timeout"] == 3
    assert kwargs["headers"] == {"Accept": "application/json"}


@pytest.mark.parametrize(
    "response",
    [
        _response(status_code=404),
        _response(invalid_json=True),
        _response(payload={"data": {}}),
        _response(payload={"data": {"mid": 0}}),
    ],
)
def test_fetch_rate_returns_none_for_unusable_responses(monkeypatch, response):
    """Errors from the API should leave the rate pending."""
    monkeypatch.setattr(hexarate_client.requests, "get", lambda url, **_: response)

    client = HexaRateClient(logger=MagicMock())

    assert client.fetch_rate(Currency.GBP, Currency.USD, "2024-01-31") is None


def test_fetch_rate_wraps_request_failures(monkeypatch):
    """Network failures should raise PersistenceError."""

    def fake_get(url, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(hexarate_client.requests, "get", fake_get)

    with pytest.raises(PersistenceError):
        HexaRateClient(logger=MagicMock()).fetch_rate(
            Currency.GBP, Currency.AED, "2024-01-31"
        )
