"""Server-side configuration as frozen dataclasses built once at startup.

Only the server entry point reads the environment (``ServerConfig.from_env``).
Library code receives a ``ServerConfig`` explicitly. Secrets live in
``ServerSecrets`` and never show up in ``repr()``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from hboost.constants import NETWORKS, ONRAMP_ENVIRONMENTS


@dataclass(frozen=True)
class ServerSecrets:
    """Holder for the only copies of server secrets."""

    hedera_private_key: str
    transak_api_secret: str

    def __repr__(self) -> str:
        return "ServerSecrets(<redacted>)"


@dataclass(frozen=True)
class ServerConfig:
    hedera_account_id: str
    hcs_topic_id: str
    transak_api_key: str
    secrets: ServerSecrets = field(repr=False)
    network: str = "testnet"
    app_domain: str = "localhost:3000"
    onramp_environment: str = "staging"

    def __post_init__(self) -> None:
        if self.network not in NETWORKS:
            raise ValueError(
                f"network must be one of {sorted(NETWORKS)}, got {self.network!r}"
            )
        if self.onramp_environment not in ONRAMP_ENVIRONMENTS:
            raise ValueError(
                f"onramp_environment must be one of {sorted(ONRAMP_ENVIRONMENTS)}, "
                f"got {self.onramp_environment!r}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config from environment variables (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        return cls(
            network=env.get("HEDERA_NETWORK") or "testnet",
            hedera_account_id=env.get("HEDERA_ACCOUNT_ID", ""),
            hcs_topic_id=env.get("HCS_TOPIC_ID", ""),
            transak_api_key=env.get("TRANSAK_API_KEY", ""),
            secrets=ServerSecrets(
                hedera_private_key=env.get("HEDERA_PRIVATE_KEY", ""),
                transak_api_secret=env.get("TRANSAK_API_SECRET", ""),
            ),
            app_domain=(
                env.get("APP_DOMAIN")
                or env.get("NEXT_PUBLIC_APP_URL")
                or "localhost:3000"
            ),
            onramp_environment=env.get("TRANSAK_ENVIRONMENT") or "staging",
        )
