"""Client facade: onboarding, balance lookup, and donation-widget launch.

Holds no secrets. Talks only to the hboost server's HTTP endpoints and to
the public mirror node.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from hboost.constants import CRYPTO_CURRENCY_CODE, WIDGET_ERROR_HTML, WIDGET_URL_PATH
from hboost.identity import IdentityWidget, Web3AuthModal
from hboost.mirror_client import MirrorNodeClient, MirrorNodeError, format_hbar
from hboost.page import DonationPage, IFrame

logger = logging.getLogger(__name__)

ONBOARDING_MESSAGE = "Creator onboarding initiated (simulated)."


class WidgetLaunchError(Exception):
    """Server call for a widget URL failed or returned no URL."""


class DonationClient:
    """Browser-side facade.

    ``launch_donation`` never raises: failures are rendered into the target
    container. ``get_account_balance`` logs and re-raises.
    """

    def __init__(
        self,
        api_base_url: str,
        network: str = "testnet",
        page: DonationPage | None = None,
        mirror: MirrorNodeClient | None = None,
        identity_factory: Callable[[str, str], IdentityWidget] = Web3AuthModal,
    ) -> None:
        self.page = page or DonationPage()
        self._mirror = mirror or MirrorNodeClient(network)
        self._identity_factory = identity_factory
        self._identity: IdentityWidget | None = None
        self._http = httpx.AsyncClient(
            base_url=api_base_url.rstrip("/"),
            headers={"content-type": "application/json"},
            timeout=httpx.Timeout(connect=5.0, read=30.0, write=10.0, pool=5.0),
        )
        logger.info("Client initialized for %s", network)

    async def onboard_creator(
        self, client_id: str, network: str = "testnet"
    ) -> dict[str, str]:
        """Open the identity widget's connect flow.

        No ledger account is derived from the provider yet; the return value
        is a placeholder acknowledgment.
        """
        widget = self._identity_factory(client_id, network)
        await widget.init()
        provider = await widget.connect()
        self._identity = widget
        logger.info("Identity provider: %r", provider)
        return {"message": ONBOARDING_MESSAGE}

    async def _request_widget_url(self, options: dict[str, Any]) -> str:
        response = await self._http.post(
            WIDGET_URL_PATH,
            json={
                "fiatAmount": options["fiatAmount"],
                "fiatCurrency": options["fiatCurrency"],
                "cryptoCurrencyCode": CRYPTO_CURRENCY_CODE,
                "walletAddress": options["walletAddress"],
            },
        )
        if not response.is_success:
            raise WidgetLaunchError("Failed to get widget URL from server")
        payload = response.json()
        widget_url = payload.get("widgetUrl") if isinstance(payload, dict) else None
        if not widget_url:
            raise WidgetLaunchError("Server response did not include a widgetUrl")
        return widget_url

    async def launch_donation(self, container_id: str, options: dict[str, Any]) -> None:
        """Fetch a widget URL from the server and embed it in *container_id*.

        *options* carries ``fiatAmount``, ``fiatCurrency`` and ``walletAddress``
        (the creator's recipient address).
        """
        container = self.page.get_element_by_id(container_id)
        if container is None:
            logger.error('Container element "%s" not found.', container_id)
            return

        try:
            widget_url = await self._request_widget_url(options)
        except Exception:
            logger.exception("Error launching donation")
            container.replace(WIDGET_ERROR_HTML)
            return

        container.clear()
        container.append(IFrame(src=widget_url).to_html())

    async def get_account_balance(self, account_id: str) -> str:
        """Return the account's hbar balance as a display string."""
        try:
            tinybars = await self._mirror.get_balance_tinybars(account_id)
        except MirrorNodeError as e:
            logger.error("Error getting account balance for %s: %s", account_id, e)
            raise
        balance = format_hbar(tinybars)
        logger.info("Balance for %s: %s", account_id, balance)
        return balance

    async def close(self) -> None:
        await self._http.aclose()
        await self._mirror.close()

    async def __aenter__(self) -> DonationClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
