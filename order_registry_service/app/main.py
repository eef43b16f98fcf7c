import asyncio
import socket
import sys
import time
from contextlib import asynccontextmanager, suppress
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.health import router as health_router
from .api.v1.orders import router as orders_router
from .core.database import OrderRegistryDatabaseManager
from .core.setting import OrderSettings, get_settings
from .middleware.error import setup_order_error_handling
from .utils.logging import setup_order_logging

settings = get_settings()

# File logging only where someone collects the files
environment = settings.ENVIRONMENT.lower()
enable_file_logging = environment in ["production", "staging"]

logger = setup_order_logging(
    "order_registry_service",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=enable_file_logging,
)


# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    startup_start = time.time()
    database_manager: OrderRegistryDatabaseManager = app.state.database_manager

    logger.info(
        "Starting order registry service",
        extra={
            "environment": environment,
            "debug_mode": app.debug,
            "file_logging_enabled": enable_file_logging,
            "service_version": app.version,
        },
    )

    # Connect in the background; a missing database must not block startup
    app.state.database_connect_task = asyncio.create_task(database_manager.connect())

    server_uri = getattr(app.state, "server_uri", None) or (
        f"http://{settings.HOST}:{settings.PORT}"
    )
    logger.info(
        f"Server running at: {server_uri}",
        extra={"startup_duration_ms": int((time.time() - startup_start) * 1000)},
    )

    yield

    shutdown_start = time.time()
    logger.info("Starting order registry service shutdown")

    connect_task: asyncio.Task = app.state.database_connect_task
    if not connect_task.done():
        connect_task.cancel()
    with suppress(asyncio.CancelledError):
        await connect_task
    await database_manager.close()

    logger.info(
        "Order registry service shutdown completed",
        extra={"shutdown_duration_ms": int((time.time() - shutdown_start) * 1000)},
    )


def create_app(
    app_settings: Optional[OrderSettings] = None,
    database_manager: Optional[OrderRegistryDatabaseManager] = None,
) -> FastAPI:
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        debug=app_settings.DEBUG,
        lifespan=lifespan,
        openapi_url="/openapi.json" if app_settings.DEBUG else None,
        docs_url="/docs" if app_settings.DEBUG else None,
        redoc_url="/redoc" if app_settings.DEBUG else None,
    )

    app.state.database_manager = database_manager or OrderRegistryDatabaseManager(
        database_url=app_settings.ORDER_DATABASE_URL,
        echo=app_settings.DEBUG,
        pool_size=app_settings.DATABASE_POOL_SIZE,
        max_overflow=app_settings.DATABASE_MAX_OVERFLOW,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=app_settings.CORS_CREDENTIALS,
        allow_methods=app_settings.CORS_METHODS,
        allow_headers=app_settings.CORS_HEADERS,
    )

    setup_order_error_handling(app)

    routers_info: list[dict[str, Any]] = []

    app.include_router(health_router, tags=["Health"])
    routers_info.append({"router": "health", "prefix": "", "tags": ["Health"]})

    app.include_router(orders_router, tags=["Orders"])
    routers_info.append({"router": "orders", "prefix": "", "tags": ["Orders"]})

    logger.info(
        "API routes configured",
        extra={"total_routers": len(routers_info), "routers": routers_info},
    )

    return app


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind the listening socket; raises OSError when the address is unusable"""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


app = create_app()


def run() -> None:
    """Bind the configured address and serve until interrupted."""
    try:
        sock = bind_socket(settings.HOST, settings.PORT)
    except OSError as e:
        logger.critical(
            "Failed to bind listening socket",
            exc_info=True,
            extra={"host": settings.HOST, "port": settings.PORT, "error": str(e)},
        )
        sys.exit(1)

    host, port = sock.getsockname()[:2]
    app.state.server_uri = f"http://{host}:{port}"

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            log_level=settings.LOG_LEVEL.lower(),
            access_log=settings.DEBUG,
        )
    )
    server.run(sockets=[sock])


if __name__ == "__main__":
    run()
