import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from washield.api.messages import router as messages_router
from washield.api.webhooks import router as webhooks_router
from washield.api.whatsapp import router as whatsapp_router
from washield.application.exceptions import ProviderConfigError
from washield.application.ports.message_store import MessageStorePort
from washield.application.ports.messaging_provider import MessagingProviderPort
from washield.application.use_cases.create_message import utc_now_iso
from washield.core.config import Settings, settings
from washield.infrastructure.store.memory_store import MemoryMessageStore


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "method",
            "path",
            "message_id",
            "sender",
            "recipient",
            "message_type",
            "status",
            "provider_status",
            "error_code",
            "error",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Resource-Policy": "same-origin",
}

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("WA-Shield backend starting", extra={"status": app.state.settings.ENV})
    yield
    provider = app.state.provider
    if provider is not None:
        await provider.aclose()


def create_app(
    app_settings: Settings | None = None,
    store: MessageStorePort | None = None,
    provider: MessagingProviderPort | None = None,
) -> FastAPI:
    app_settings = app_settings or settings

    app = FastAPI(title="WA-Shield Relay", version="1.0.0", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.message_store = store if store is not None else MemoryMessageStore()
    app.state.provider = provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Request", extra={"method": request.method, "path": request.url.path})
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request body"})

    @app.exception_handler(ProviderConfigError)
    async def provider_config_error(request: Request, exc: ProviderConfigError):
        logger.error(f"Provider unavailable: {exc}", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception(f"Error: {exc}", extra={"method": request.method, "path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)},
            headers=SECURITY_HEADERS,
        )

    app.include_router(whatsapp_router, tags=["whatsapp"])
    app.include_router(messages_router, tags=["messages"])
    app.include_router(webhooks_router, tags=["webhooks"])

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "OK", "timestamp": utc_now_iso()}

    return app


configure_logging(settings.LOG_LEVEL)

app = create_app()


def run() -> None:
    import uvicorn

    logger.info(f"WA-Shield backend listening on port {settings.PORT}")
    logger.info(f"Environment: {settings.ENV}")
    uvicorn.run("washield.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
