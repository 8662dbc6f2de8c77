"""hboost: creator donations on Hedera.

Fiat on-ramp widget sessions and consensus-topic donation receipts,
split into a secrets-holding server facade and a browser-safe client.
"""

__version__ = "0.1.0"

from hboost.client import DonationClient, WidgetLaunchError
from hboost.config import ServerConfig, ServerSecrets
from hboost.identity import IdentityWidget, Web3AuthModal
from hboost.ledger import DonationRecord, LedgerError, LedgerGateway, TopicReceipt
from hboost.mirror_client import MirrorNodeClient, MirrorNodeError, format_hbar
from hboost.onramp_client import AccessToken, OnRampError, TransakClient, WidgetParams
from hboost.page import DonationPage, IFrame, WidgetContainer
from hboost.server import DonationError, DonationServer
from hboost.constants import CRYPTO_CURRENCY_CODE

__all__ = [
    "DonationClient",
    "WidgetLaunchError",
    "ServerConfig",
    "ServerSecrets",
    "IdentityWidget",
    "Web3AuthModal",
    "DonationRecord",
    "LedgerError",
    "LedgerGateway",
    "TopicReceipt",
    "MirrorNodeClient",
    "MirrorNodeError",
    "format_hbar",
    "AccessToken",
    "OnRampError",
    "TransakClient",
    "WidgetParams",
    "DonationPage",
    "IFrame",
    "WidgetContainer",
    "DonationError",
    "DonationServer",
    "CRYPTO_CURRENCY_CODE",
]
