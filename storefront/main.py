import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from storefront.core.config import Settings, settings as default_settings
from storefront.core.errors import register_exception_handlers
from storefront.core.logging_config import configure_logging
from storefront.db.store import DocumentStore, build_store
from storefront.integrations.telegram import Notifier, TelegramNotifier
from storefront.models.catalog import Catalog, load_catalog

# Import routers
from storefront.api.auth import router as auth_router
from storefront.api.catalog import router as catalog_router
from storefront.api.feedback import inquiries_router, suggestions_router
from storefront.api.orders import router as orders_router
from storefront.api.pages import router as pages_router

logger = logging.getLogger(__name__)

_UNSET = object()


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None | object = _UNSET,
    catalog: Catalog | None = None,
    notifier: Notifier | None | object = _UNSET,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.store = build_store(settings) if store is _UNSET else store
    app.state.catalog = catalog or load_catalog(settings.resolved_catalog_path)
    app.state.notifier = TelegramNotifier.from_settings(settings) if notifier is _UNSET else notifier

    if settings.jwt_secret == "secret_key":
        logger.warning("JWT_SECRET is the built-in default; set it before deploying")

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    register_exception_handlers(app)

    @app.get("/health")
    def health():
        return {"status": "ok", "env": settings.app_env}

    # Include authentication routes
    app.include_router(auth_router)
    # Include catalog + order routes
    app.include_router(catalog_router)
    app.include_router(orders_router)
    # Optional capabilities
    if settings.suggestions_enabled:
        app.include_router(suggestions_router)
    if settings.inquiries_enabled:
        app.include_router(inquiries_router)
    # Include page routes
    app.include_router(pages_router)

    # Assets only; uploads are never exposed here
    app.mount("/static", StaticFiles(directory=settings.public_dir, check_dir=False), name="static")

    logger.info(
        "%s started (env=%s, plans=%s, screenshot_required=%s, subscriptions=%d)",
        settings.app_name,
        settings.app_env,
        settings.plans_enabled,
        settings.screenshot_required,
        len(app.state.catalog.subscriptions),
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.app_host, port=default_settings.app_port, log_level=default_settings.log_level)
