"""Tests for the donation HTTP routes."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from hboost.api import create_app, create_app_from_env
from hboost.config import ServerConfig, ServerSecrets
from hboost.ledger import DonationRecord, LedgerGateway, TopicReceipt
from hboost.onramp_client import TransakClient, WidgetParams
from hboost.server import DonationError, DonationServer


@pytest.fixture
def server():
    mock = AsyncMock(spec=DonationServer)
    mock.generate_widget_url = AsyncMock(return_value="https://example/session/abc")
    mock.log_donation = AsyncMock(
        return_value=TopicReceipt("42", "0.0.1001@1700000000.000000001")
    )
    return mock


@pytest.fixture
def client(server):
    return TestClient(create_app(server))


WIDGET_BODY = {"fiatAmount": 20, "fiatCurrency": "USD", "walletAddress": "0.0.777"}
DONATION_BODY = {"recipient": "0.0.777", "usdValue": 20, "txId": "tx-1"}


# ---------------------------------------------------------------------------
# POST /api/generate-widget-url
# ---------------------------------------------------------------------------


class TestGenerateWidgetUrl:
    def test_success(self, client, server) -> None:
        resp = client.post("/api/generate-widget-url", json=WIDGET_BODY)
        assert resp.status_code == 200
        assert resp.json() == {"widgetUrl": "https://example/session/abc"}
        server.generate_widget_url.assert_awaited_once_with(
            WidgetParams(fiat_amount=20, fiat_currency="USD", wallet_address="0.0.777")
        )

    def test_crypto_code_is_forced_to_hbar(self, client, server) -> None:
        body = dict(WIDGET_BODY, cryptoCurrencyCode="BTC")
        client.post("/api/generate-widget-url", json=body)
        params = server.generate_widget_url.call_args[0][0]
        assert params.crypto_currency_code == "HBAR"

    @pytest.mark.parametrize("field", ["fiatAmount", "fiatCurrency", "walletAddress"])
    def test_missing_field_returns_400(self, client, server, field) -> None:
        body = {k: v for k, v in WIDGET_BODY.items() if k != field}
        resp = client.post("/api/generate-widget-url", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": f"Missing required fields: {field}"}
        server.generate_widget_url.assert_not_called()

    def test_lists_every_missing_field(self, client, server) -> None:
        resp = client.post("/api/generate-widget-url", json={"fiatCurrency": "USD"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Missing required fields: fiatAmount, walletAddress"

    def test_zero_amount_counts_as_missing(self, client, server) -> None:
        resp = client.post(
            "/api/generate-widget-url", json=dict(WIDGET_BODY, fiatAmount=0)
        )
        assert resp.status_code == 400
        server.generate_widget_url.assert_not_called()

    def test_invalid_json(self, client, server) -> None:
        resp = client.post(
            "/api/generate-widget-url",
            content=b"not json",
            headers={"content-type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid JSON body"}
        server.generate_widget_url.assert_not_called()

    def test_non_object_json(self, client, server) -> None:
        resp = client.post("/api/generate-widget-url", json=["a", "b"])
        assert resp.status_code == 400

    def test_server_error_is_generic(self, client, server) -> None:
        server.generate_widget_url = AsyncMock(
            side_effect=DonationError("Could not create donation session")
        )
        resp = client.post("/api/generate-widget-url", json=WIDGET_BODY)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate widget URL"}


# ---------------------------------------------------------------------------
# POST /api/log-donation
# ---------------------------------------------------------------------------


class TestLogDonation:
    def test_success(self, client, server) -> None:
        resp = client.post("/api/log-donation", json=DONATION_BODY)
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "message": "Donation logged to HCS",
            "sequenceNumber": "42",
            "transactionId": "0.0.1001@1700000000.000000001",
        }
        server.log_donation.assert_awaited_once_with(
            DonationRecord(recipient="0.0.777", usd_value=20, tx_id="tx-1")
        )

    @pytest.mark.parametrize("field", ["recipient", "usdValue", "txId"])
    def test_missing_field_returns_400(self, client, server, field) -> None:
        body = {k: v for k, v in DONATION_BODY.items() if k != field}
        resp = client.post("/api/log-donation", json=body)
        assert resp.status_code == 400
        assert field in resp.json()["error"]
        server.log_donation.assert_not_called()

    def test_server_error_is_generic(self, client, server) -> None:
        server.log_donation = AsyncMock(side_effect=DonationError("Could not log donation"))
        resp = client.post("/api/log-donation", json=DONATION_BODY)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to log donation to HCS"}


class TestUnexpectedErrors:
    def test_transport_failure_returns_json_500(self) -> None:
        config = ServerConfig(
            hedera_account_id="0.0.1001",
            hcs_topic_id="0.0.5005",
            transak_api_key="api-key",
            secrets=ServerSecrets(hedera_private_key="k", transak_api_secret="s"),
        )
        onramp = TransakClient("api-key", "s")
        onramp._client.post = AsyncMock(side_effect=httpx.ReadError("reset"))
        ledger = AsyncMock(spec=LedgerGateway)
        app = create_app(DonationServer(config, ledger, onramp))
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.post("/api/generate-widget-url", json=WIDGET_BODY)
        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == {"error": "Failed to generate widget URL"}

    def test_unexpected_widget_error_is_generic(self, server) -> None:
        server.generate_widget_url = AsyncMock(side_effect=RuntimeError("secret detail"))
        client = TestClient(create_app(server), raise_server_exceptions=False)
        resp = client.post("/api/generate-widget-url", json=WIDGET_BODY)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate widget URL"}
        assert "secret detail" not in resp.text

    def test_unexpected_log_error_is_generic(self, server) -> None:
        server.log_donation = AsyncMock(side_effect=KeyError("topic"))
        client = TestClient(create_app(server), raise_server_exceptions=False)
        resp = client.post("/api/log-donation", json=DONATION_BODY)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to log donation to HCS"}


# ---------------------------------------------------------------------------
# App wiring
# ---------------------------------------------------------------------------


class TestAppWiring:
    def test_lifespan_closes_server(self, server) -> None:
        with TestClient(create_app(server)):
            pass
        server.close.assert_awaited_once()

    def test_create_app_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("HEDERA_NETWORK", "testnet")
        monkeypatch.setenv("HEDERA_ACCOUNT_ID", "0.0.1001")
        monkeypatch.setenv("HEDERA_PRIVATE_KEY", "302e-private")
        monkeypatch.setenv("HCS_TOPIC_ID", "0.0.5005")
        monkeypatch.setenv("TRANSAK_API_KEY", "api-key")
        monkeypatch.setenv("TRANSAK_API_SECRET", "api-secret")
        with patch("hboost.ledgers.hedera.HederaLedger") as ledger_cls:
            app = create_app_from_env()
        ledger_cls.assert_called_once_with("testnet", "0.0.1001", "302e-private")
        assert isinstance(app.state.donation_server, DonationServer)
