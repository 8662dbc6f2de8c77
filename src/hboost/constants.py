"""Constants for hboost donation flows."""

NETWORKS = frozenset({"mainnet", "testnet"})

# Crypto delivered by the on-ramp widget; donations always settle in HBAR.
CRYPTO_CURRENCY_CODE = "HBAR"

# Transak partner endpoints, keyed by environment.
ONRAMP_ENVIRONMENTS: dict[str, dict[str, str]] = {
    "staging": {
        "refresh_url": "https://api-stg.transak.com/partners/api/v2/refresh-token",
        "session_url": "https://api-gateway-stg.transak.com/api/v2/auth/session",
    },
    "production": {
        "refresh_url": "https://api.transak.com/partners/api/v2/refresh-token",
        "session_url": "https://api-gateway.transak.com/api/v2/auth/session",
    },
}

MIRROR_NODE_URLS: dict[str, str] = {
    "mainnet": "https://mainnet-public.mirrornode.hedera.com",
    "testnet": "https://testnet.mirrornode.hedera.com",
}

TINYBARS_PER_HBAR = 100_000_000
# Balances under this many tinybars render in tinybar units (tℏ).
TINYBAR_DISPLAY_THRESHOLD = 10_000

WIDGET_URL_PATH = "/api/generate-widget-url"
LOG_DONATION_PATH = "/api/log-donation"

IFRAME_WIDTH = "100%"
IFRAME_HEIGHT = "625"  # Transak's recommended height
IFRAME_REFERRER_POLICY = "strict-origin-when-cross-origin"

WIDGET_ERROR_HTML = (
    "<p>Error: Could not load the donation widget. Please try again later.</p>"
)
