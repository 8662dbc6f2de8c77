"""Identity widget seam (Web3Auth modal).

The real modal only exists in the browser. ``Web3AuthModal`` is the
in-process session used by ``DonationClient.onboard_creator``: it records the
widget configuration and hands back an opaque provider handle. No ledger
account is derived from it.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

WEB3AUTH_NETWORKS: dict[str, str] = {
    "mainnet": "mainnet",
    "testnet": "testnet",
}


class IdentityWidgetError(Exception):
    """Raised when the identity widget is used out of order."""


@runtime_checkable
class IdentityWidget(Protocol):
    async def init(self) -> None: ...

    async def connect(self) -> Any: ...


class Web3AuthModal:
    """Opaque Web3Auth modal session."""

    def __init__(self, client_id: str, network: str = "testnet") -> None:
        if network not in WEB3AUTH_NETWORKS:
            raise ValueError(f"Unknown Web3Auth network: {network!r}")
        self.client_id = client_id
        self.web3auth_network = WEB3AUTH_NETWORKS[network]
        self._initialized = False
        self._provider: dict[str, Any] | None = None

    @property
    def connected(self) -> bool:
        return self._provider is not None

    async def init(self) -> None:
        self._initialized = True

    async def connect(self) -> dict[str, Any]:
        """Open the connect flow and return the provider handle."""
        if not self._initialized:
            raise IdentityWidgetError("init() must be awaited before connect()")
        self._provider = {
            "clientId": self.client_id,
            "web3AuthNetwork": self.web3auth_network,
        }
        return self._provider
