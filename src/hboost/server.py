"""Server facade: widget-URL generation and donation logging.

Runs only on a trusted backend. It is the sole holder of ``ServerSecrets``.
Every upstream failure is logged here in full and re-raised as a
``DonationError`` carrying a short, safe message.
"""

from __future__ import annotations

import logging

from hboost.config import ServerConfig
from hboost.ledger import DonationRecord, LedgerError, LedgerGateway, TopicReceipt
from hboost.onramp_client import AccessToken, OnRampError, TransakClient, WidgetParams

logger = logging.getLogger(__name__)


class DonationError(Exception):
    """Generic domain failure; message is safe to show to callers."""


class DonationServer:
    """Secrets-holding facade over the on-ramp provider and the ledger.

    No token is kept between calls: ``generate_widget_url`` always refreshes,
    and concurrent requests each get their own token.
    """

    def __init__(
        self,
        config: ServerConfig,
        ledger: LedgerGateway,
        onramp: TransakClient | None = None,
    ) -> None:
        self._config = config
        self._ledger = ledger
        self._onramp = onramp or TransakClient(
            config.transak_api_key,
            config.secrets.transak_api_secret,
            environment=config.onramp_environment,
        )
        logger.info(
            "Donation server initialized for %s and account %s.",
            config.network, config.hedera_account_id,
        )

    async def refresh_access_token(self) -> AccessToken:
        """Fetch a fresh partner access token."""
        try:
            return await self._onramp.refresh_access_token()
        except OnRampError as e:
            logger.error(
                "Error refreshing on-ramp access token (status=%s): %s",
                e.status_code, e,
            )
            raise DonationError("Could not refresh on-ramp access token") from e

    async def generate_widget_url(self, widget_params: WidgetParams) -> str:
        """Create a one-time donation widget session and return its URL only."""
        access_token = await self.refresh_access_token()
        try:
            return await self._onramp.create_widget_session(
                access_token, widget_params, referrer_domain=self._config.app_domain
            )
        except OnRampError as e:
            logger.error(
                "Error generating on-ramp widget URL (status=%s): %s",
                e.status_code, e,
            )
            raise DonationError("Could not create donation session") from e

    async def log_donation(self, record: DonationRecord) -> TopicReceipt:
        """Append *record* to the consensus topic; return the network receipt."""
        try:
            receipt = await self._ledger.submit_message(
                self._config.hcs_topic_id, record.to_json()
            )
        except LedgerError as e:
            logger.error("Error logging donation to HCS for %s: %s", record.tx_id, e)
            raise DonationError("Could not log donation") from e
        logger.info(
            "Donation logged to HCS: %s (tx %s).",
            receipt.sequence_number, receipt.transaction_id,
        )
        return receipt

    async def close(self) -> None:
        """Release the on-ramp HTTP client and the ledger client."""
        await self._onramp.close()
        await self._ledger.close()
