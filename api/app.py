"""Application factory wiring services, middleware and routers."""

from fastapi import FastAPI

from api.config import AppConfig
from api.errors import register_error_handlers
from api.invoices import create_invoices_router
from api.middleware import RequestIDMiddleware
from api.views import RedirectNavigator, ValkeyViewCache
from auth.config import AuthConfig
from auth.api import create_auth_router
from auth.database import AuthDatabase
from auth.rate_limiter import RateLimiter
from auth.security_middleware import AuthMiddleware
from auth.service import AuthService
from auth.session import SessionManager
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from core.actions import InvoiceActions
from core.services.invoice_service import InvoiceService


def create_app(
    postgres: PostgresClient,
    valkey: ValkeyClient,
    config: AppConfig | None = None,
    auth_config: AuthConfig | None = None,
    lifespan=None,
) -> FastAPI:
    """Build the dashboard app around already-connected clients."""
    config = config or AppConfig()
    auth_config = auth_config or AuthConfig()

    session_manager = SessionManager(valkey, auth_config)
    auth_service = AuthService(
        auth_db=AuthDatabase(postgres),
        session_manager=session_manager,
        rate_limiter=RateLimiter(valkey, auth_config),
    )

    invoice_service = InvoiceService(postgres)
    view_cache = ValkeyViewCache(valkey, ttl_seconds=config.listing_cache_ttl_seconds)
    actions = InvoiceActions(
        invoice_service,
        view_cache=view_cache,
        navigator=RedirectNavigator(),
        invoices_route=config.invoices_route,
    )

    app = FastAPI(title=config.app_name, lifespan=lifespan)
    app.add_middleware(AuthMiddleware, session_manager=session_manager)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True}

    app.include_router(create_auth_router(auth_service, auth_config))
    app.include_router(create_invoices_router(invoice_service, actions, view_cache, config))

    return app
