import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import health_router, payments_router
from config import Settings, settings
from constants import INTERNAL_ERROR_MESSAGE, INVALID_ORDER_MESSAGE
from repositories.orders_repository import OrdersRepository
from services.notifications import HubtelSmsClient, ReservationStatusReactor
from services.paystack import PaystackVerifier
from services.reservation_listener import ReservationStatusListener
from services.settlement_service import SettlementService
from supabase_client import build_supabase_client

logger = logging.getLogger("order-relay")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
    "X-Permitted-Cross-Domain-Policies": "none",
}


async def _start_listener(
    app: FastAPI, app_settings: Settings, http_client: httpx.AsyncClient
) -> None:
    if not app_settings.store_configured:
        logger.warning("Supabase credentials not configured, skipping realtime listener setup.")
        return
    sms_client = HubtelSmsClient(
        app_settings.hubtel_client_id,
        app_settings.hubtel_client_secret,
        app_settings.hubtel_from,
        url=app_settings.hubtel_sms_url,
        http_client=http_client,
    )
    listener = ReservationStatusListener(
        ReservationStatusReactor(sms_client),
        supabase_url=app_settings.supabase_url,
        supabase_key=app_settings.supabase_service_key,
        table=app_settings.reservations_table,
    )
    try:
        await listener.start()
    except Exception as exc:
        logger.exception("Failed to set up reservation status listener: %s", exc)
        return
    app.state.reservation_listener = listener


def _build_settlement_service(
    app_settings: Settings, http_client: httpx.AsyncClient
) -> SettlementService | None:
    missing = app_settings.missing_for_settlement()
    if missing:
        logger.error("Order settlement disabled; missing: %s", ", ".join(missing))
        return None
    verifier = PaystackVerifier(
        app_settings.paystack_secret_key,
        base_url=app_settings.paystack_base_url,
        http_client=http_client,
    )
    orders = OrdersRepository(
        build_supabase_client(app_settings), table_name=app_settings.orders_table
    )
    return SettlementService(verifier, orders)


def create_app(app_settings: Settings = settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http_client = httpx.AsyncClient(timeout=app_settings.http_timeout_seconds)
        app.state.settlement_service = _build_settlement_service(app_settings, http_client)
        app.state.sms_enabled = app_settings.sms_configured
        if not app_settings.sms_configured:
            logger.warning("Hubtel credentials not configured; SMS notifications will fail.")
        await _start_listener(app, app_settings, http_client)
        try:
            yield
        finally:
            listener = getattr(app.state, "reservation_listener", None)
            if listener is not None:
                await listener.stop()
            await http_client.aclose()

    app = FastAPI(title="Order Relay API", lifespan=lifespan)

    # registered first so it sits inside CORS and the security headers
    @app.middleware("http")
    async def unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("[CRITICAL] Unhandled server error on %s: %s", request.url.path, exc)
            return JSONResponse(status_code=500, content={"ok": False, "error": INTERNAL_ERROR_MESSAGE})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"ok": False, "error": INVALID_ORDER_MESSAGE})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("[CRITICAL] Unhandled server error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"ok": False, "error": INTERNAL_ERROR_MESSAGE})

    app.include_router(health_router)
    app.include_router(payments_router)
    return app


logging.basicConfig(level=settings.log_level)
app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, server_header=False)
