"""Consensus-topic ledger seam: donation records, receipts, and the gateway Protocol.

Pure data model plus an interface. No I/O here. Concrete gateways
(e.g., ``HederaLedger``) live in ``hboost.ledgers``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


class LedgerError(Exception):
    """Raised when a ledger submission fails or is rejected by the network."""


# ---------------------------------------------------------------------------
# DonationRecord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DonationRecord:
    """A completed donation, appended to a consensus topic as proof."""

    recipient: str
    usd_value: float
    tx_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "recipient": self.recipient,
            "usdValue": self.usd_value,
            "txId": self.tx_id,
        }

    def to_json(self) -> str:
        """Compact JSON message body submitted to the topic."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DonationRecord:
        return cls(
            recipient=str(data["recipient"]),
            usd_value=data["usdValue"],
            tx_id=str(data["txId"]),
        )


# ---------------------------------------------------------------------------
# TopicReceipt
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TopicReceipt:
    """Network-assigned proof of a topic submission.

    ``sequence_number`` is the network's value, stringified and never computed
    locally.
    """

    sequence_number: str
    transaction_id: str

    def to_dict(self) -> dict[str, str]:
        return {
            "sequenceNumber": self.sequence_number,
            "transactionId": self.transaction_id,
        }


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------


@runtime_checkable
class LedgerGateway(Protocol):
    """Signed consensus-topic submission.

    Implementations hold the operator credentials, sign the message
    transaction, wait for the receipt, and raise ``LedgerError`` on failure.
    """

    async def submit_message(self, topic_id: str, message: str) -> TopicReceipt: ...

    async def close(self) -> None: ...
