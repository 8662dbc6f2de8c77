"""HederaLedger: a LedgerGateway backed by the Hedera Consensus Service (HCS).

Uses ``hiero-sdk-python``. The SDK is synchronous (gRPC), so each submission
runs in a worker thread via ``asyncio.to_thread``.

Flow per donation:
- build ``TopicMessageSubmitTransaction`` for the configured topic
- freeze with the operator client, sign with the operator key
- execute, which waits for the receipt
- return the receipt's topic sequence number verbatim
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from hiero_sdk_python import (
    AccountId,
    Client,
    Network,
    PrivateKey,
    ResponseCode,
    TopicId,
    TopicMessageSubmitTransaction,
)

from hboost.ledger import LedgerError, TopicReceipt

logger = logging.getLogger(__name__)


def _sequence_number(receipt: Any) -> Any:
    """Read the topic sequence number off an SDK receipt.

    Older SDK releases expose only the raw protobuf receipt.
    """
    value = getattr(receipt, "topic_sequence_number", None)
    if value is None:
        proto = getattr(receipt, "_receipt_proto", None)
        value = getattr(proto, "topicSequenceNumber", None)
    if value is None:
        raise LedgerError("Receipt carries no topic sequence number")
    return value


class HederaLedger:
    """Operator-signed topic submission on mainnet or testnet.

    Implements the hboost ``LedgerGateway`` protocol:

    - ``submit_message(topic_id, message) -> TopicReceipt``
    - ``close()``
    """

    def __init__(self, network: str, operator_id: str, operator_key: str) -> None:
        self._network = network
        self._operator_key = PrivateKey.from_string(operator_key)
        self._client = Client(Network(network=network))
        self._client.set_operator(AccountId.from_string(operator_id), self._operator_key)
        logger.info(
            "Hedera ledger initialized for %s and account %s.", network, operator_id
        )

    def _submit(self, topic_id: str, message: str) -> TopicReceipt:
        transaction = (
            TopicMessageSubmitTransaction(
                topic_id=TopicId.from_string(topic_id), message=message
            )
            .freeze_with(self._client)
            .sign(self._operator_key)
        )
        receipt = transaction.execute(self._client)
        if receipt.status != ResponseCode.SUCCESS:
            raise LedgerError(f"Topic message rejected with status {receipt.status}")
        return TopicReceipt(
            sequence_number=str(_sequence_number(receipt)),
            transaction_id=str(transaction.transaction_id),
        )

    async def submit_message(self, topic_id: str, message: str) -> TopicReceipt:
        """Submit *message* to *topic_id* and wait for consensus."""
        try:
            return await asyncio.to_thread(self._submit, topic_id, message)
        except LedgerError:
            raise
        except Exception as exc:
            raise LedgerError(f"Topic submission to {topic_id} failed: {exc}") from exc

    async def close(self) -> None:
        """Close the SDK's gRPC channels."""
        self._client.close()
