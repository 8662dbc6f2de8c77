"""HTTP routes for the donation flow and the server entry point.

Endpoints:
- POST /api/generate-widget-url — {fiatAmount, fiatCurrency, walletAddress} -> {widgetUrl}
- POST /api/log-donation        — {recipient, usdValue, txId} -> {success, message, ...}

Validation failures return 400 with the missing fields listed. Any other
error returns 500 with a fixed JSON message; details stay in the server log.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from hboost.config import ServerConfig
from hboost.constants import LOG_DONATION_PATH, WIDGET_URL_PATH
from hboost.ledger import DonationRecord
from hboost.onramp_client import WidgetParams
from hboost.server import DonationError, DonationServer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["donations"])

WIDGET_URL_FIELDS = ("fiatAmount", "fiatCurrency", "walletAddress")
LOG_DONATION_FIELDS = ("recipient", "usdValue", "txId")


def _missing_fields(body: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    # Empty strings and zero amounts count as missing.
    return [name for name in required if not body.get(name)]


async def _json_object(request: Request) -> dict[str, Any] | None:
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _validate(
    body: dict[str, Any] | None, required: tuple[str, ...]
) -> JSONResponse | None:
    if body is None:
        return _error("Invalid JSON body", 400)
    missing = _missing_fields(body, required)
    if missing:
        return _error(f"Missing required fields: {', '.join(missing)}", 400)
    return None


def get_server(request: Request) -> DonationServer:
    return request.app.state.donation_server


@router.post(WIDGET_URL_PATH, response_model=None)
async def generate_widget_url(request: Request) -> dict[str, Any] | JSONResponse:
    body = await _json_object(request)
    invalid = _validate(body, WIDGET_URL_FIELDS)
    if invalid is not None:
        return invalid

    params = WidgetParams(
        fiat_amount=body["fiatAmount"],
        fiat_currency=body["fiatCurrency"],
        wallet_address=body["walletAddress"],
    )
    try:
        widget_url = await get_server(request).generate_widget_url(params)
    except DonationError as e:
        logger.error("Failed to generate widget URL: %s", e)
        return _error("Failed to generate widget URL", 500)
    except Exception:
        logger.exception("Unexpected error generating widget URL")
        return _error("Failed to generate widget URL", 500)
    return {"widgetUrl": widget_url}


@router.post(LOG_DONATION_PATH, response_model=None)
async def log_donation(request: Request) -> dict[str, Any] | JSONResponse:
    body = await _json_object(request)
    invalid = _validate(body, LOG_DONATION_FIELDS)
    if invalid is not None:
        return invalid

    record = DonationRecord.from_dict(body)
    try:
        receipt = await get_server(request).log_donation(record)
    except DonationError as e:
        logger.error("Failed to log donation: %s", e)
        return _error("Failed to log donation to HCS", 500)
    except Exception:
        logger.exception("Unexpected error logging donation")
        return _error("Failed to log donation to HCS", 500)
    return {
        "success": True,
        "message": "Donation logged to HCS",
        **receipt.to_dict(),
    }


def create_app(server: DonationServer) -> FastAPI:
    """Build the app around an already-configured server facade."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await server.close()

    app = FastAPI(title="hboost", lifespan=lifespan)
    app.state.donation_server = server
    app.include_router(router)
    return app


def create_app_from_env() -> FastAPI:
    """Wire config, ledger gateway, and server facade from the environment."""
    from hboost.ledgers.hedera import HederaLedger

    config = ServerConfig.from_env()
    ledger = HederaLedger(
        config.network,
        config.hedera_account_id,
        config.secrets.hedera_private_key,
    )
    return create_app(DonationServer(config, ledger))


def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app_from_env(),
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "3000")),
    )


if __name__ == "__main__":
    main()
