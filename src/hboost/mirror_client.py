"""Async HTTP client for the public Hedera mirror node (read-only, no credentials)."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import httpx

from hboost.constants import (
    MIRROR_NODE_URLS,
    TINYBAR_DISPLAY_THRESHOLD,
    TINYBARS_PER_HBAR,
)


class MirrorNodeError(Exception):
    """Base exception for mirror node queries."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MirrorNodeNotFoundError(MirrorNodeError):
    """Account unknown to the mirror node."""


class MirrorNodeConnectionError(MirrorNodeError):
    """Network/DNS failure."""


class MirrorNodeTimeoutError(MirrorNodeError):
    """Request timeout."""


class MirrorNodeResponseError(MirrorNodeError):
    """2xx response that is not JSON or lacks the expected fields."""


def format_hbar(tinybars: int) -> str:
    """Render a tinybar amount the way the ledger SDK's ``Hbar.toString()`` does.

    Small amounts stay in tinybars (``"250 tℏ"``); everything else is in
    hbar with trailing zeros dropped (``"12.5 ℏ"``).
    """
    if -TINYBAR_DISPLAY_THRESHOLD < tinybars < TINYBAR_DISPLAY_THRESHOLD:
        return f"{tinybars} tℏ"
    hbars = (Decimal(tinybars) / TINYBARS_PER_HBAR).normalize()
    return f"{hbars:f} ℏ"


class MirrorNodeClient:
    """Async client for the mirror node REST API v1."""

    def __init__(self, network: str = "testnet", base_url: str | None = None) -> None:
        root = base_url or MIRROR_NODE_URLS[network]
        self._client = httpx.AsyncClient(
            base_url=root.rstrip("/") + "/api/v1",
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(connect=5.0, read=15.0, write=10.0, pool=5.0),
        )

    async def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.ConnectError as exc:
            raise MirrorNodeConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise MirrorNodeTimeoutError(str(exc)) from exc
        except httpx.HTTPError as exc:
            raise MirrorNodeConnectionError(str(exc)) from exc

        if response.status_code == 404:
            raise MirrorNodeNotFoundError(response.text, status_code=404)
        if response.status_code >= 400:
            raise MirrorNodeError(response.text, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise MirrorNodeResponseError(
                f"Non-JSON response from {endpoint}", status_code=response.status_code
            ) from exc

    async def get_balance_tinybars(self, account_id: str) -> int:
        """GET /balances?account.id={id} — current hbar balance in tinybars."""
        payload = await self._get("/balances", params={"account.id": account_id})
        balances = payload.get("balances") if isinstance(payload, dict) else None
        for entry in balances or []:
            if isinstance(entry, dict) and entry.get("account") == account_id:
                try:
                    return int(entry["balance"])
                except (KeyError, TypeError, ValueError) as exc:
                    raise MirrorNodeResponseError(
                        f"Malformed balance entry for {account_id}: {entry!r}"
                    ) from exc
        raise MirrorNodeNotFoundError(f"No balance found for account {account_id}")

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> MirrorNodeClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
