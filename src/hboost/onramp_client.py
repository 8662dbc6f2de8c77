"""Async HTTP client for the Transak partner API (refresh token + widget session)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from hboost.constants import CRYPTO_CURRENCY_CODE, ONRAMP_ENVIRONMENTS

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------


class OnRampError(Exception):
    """Base exception for on-ramp provider operations."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OnRampAuthError(OnRampError):
    """401/403 — bad API key/secret or expired access token."""


class OnRampNotFoundError(OnRampError):
    """404 — endpoint or resource not found."""


class OnRampValidationError(OnRampError):
    """400/422 — provider rejected the request payload."""


class OnRampServerError(OnRampError):
    """5xx — provider-side error."""


class OnRampConnectionError(OnRampError):
    """Network/DNS failure."""


class OnRampTimeoutError(OnRampError):
    """Request timeout."""


class OnRampResponseError(OnRampError):
    """2xx response that lacks the expected field."""


_STATUS_MAP: dict[int, type[OnRampError]] = {
    400: OnRampValidationError,
    401: OnRampAuthError,
    403: OnRampAuthError,
    404: OnRampNotFoundError,
    422: OnRampValidationError,
}


def _parse_expiry(raw: Any) -> int | None:
    """Epoch-seconds expiry, or None when absent or not numeric."""
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric access token expiry: %r", raw)
        return None


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccessToken:
    """Short-lived partner bearer token. Never cached; fetched per request."""

    value: str
    expires_at: int | None = None

    def __repr__(self) -> str:
        return f"AccessToken(value=<redacted>, expires_at={self.expires_at!r})"


@dataclass(frozen=True)
class WidgetParams:
    fiat_amount: float
    fiat_currency: str
    wallet_address: str
    crypto_currency_code: str = CRYPTO_CURRENCY_CODE

    def to_dict(self) -> dict[str, Any]:
        return {
            "fiatAmount": self.fiat_amount,
            "fiatCurrency": self.fiat_currency,
            "cryptoCurrencyCode": self.crypto_currency_code,
            "walletAddress": self.wallet_address,
        }


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class TransakClient:
    """Async client for the Transak partner API.

    Constructor accepts explicit params and does no env-var loading. The API secret
    is only ever sent to the refresh-token endpoint.
    """

    def __init__(
        self, api_key: str, api_secret: str, environment: str = "staging"
    ) -> None:
        urls = ONRAMP_ENVIRONMENTS[environment]
        self._api_key = api_key
        self._api_secret = api_secret
        self._refresh_url = urls["refresh_url"]
        self._session_url = urls["session_url"]
        self._client = httpx.AsyncClient(
            headers={
                "accept": "application/json",
                "content-type": "application/json",
            },
            timeout=httpx.Timeout(connect=5.0, read=15.0, write=10.0, pool=5.0),
        )

    # -- internal request dispatcher -----------------------------------------

    async def _post(
        self,
        url: str,
        json_data: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST and map errors to the OnRamp exception hierarchy."""
        try:
            response = await self._client.post(url, json=json_data, headers=headers)
        except httpx.ConnectError as exc:
            raise OnRampConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise OnRampTimeoutError(str(exc)) from exc
        except httpx.HTTPError as exc:
            raise OnRampConnectionError(str(exc)) from exc

        if response.status_code >= 400:
            body = response.text
            exc_cls = _STATUS_MAP.get(response.status_code)
            if exc_cls is not None:
                raise exc_cls(body, status_code=response.status_code)
            if response.status_code >= 500:
                raise OnRampServerError(body, status_code=response.status_code)
            raise OnRampError(body, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise OnRampResponseError(
                f"Non-JSON response from {url}", status_code=response.status_code
            ) from exc

    # -- public API methods ---------------------------------------------------

    async def refresh_access_token(self) -> AccessToken:
        """POST refresh-token — exchange API key + secret for a bearer token."""
        payload = await self._post(
            self._refresh_url,
            {"apiKey": self._api_key, "apiSecret": self._api_secret},
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        token = data.get("accessToken") if isinstance(data, dict) else None
        if not token:
            raise OnRampResponseError(
                f"Refresh response missing data.accessToken: {payload!r}"
            )
        return AccessToken(value=str(token), expires_at=_parse_expiry(data.get("expiresAt")))

    async def create_widget_session(
        self,
        access_token: AccessToken,
        widget_params: WidgetParams,
        referrer_domain: str,
    ) -> str:
        """POST auth/session — create a one-time widget session.

        Returns only ``data.widgetUrl``; every other session field is dropped.
        """
        body = {
            "widgetParams": {
                "apiKey": self._api_key,
                "referrerDomain": referrer_domain,
                **widget_params.to_dict(),
                "disableWalletAddressForm": True,
            },
        }
        payload = await self._post(
            self._session_url, body, headers={"access-token": access_token.value}
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        widget_url = data.get("widgetUrl") if isinstance(data, dict) else None
        if not widget_url:
            raise OnRampResponseError(
                f"Session response missing data.widgetUrl: {payload!r}"
            )
        return str(widget_url)

    # -- lifecycle ------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> TransakClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
