"""Concrete LedgerGateway implementations."""

from hboost.ledgers.hedera import HederaLedger

__all__ = ["HederaLedger"]
