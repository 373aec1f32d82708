"""
meshcoord - coordination point for mobile/ad-hoc networks.

Features:
- Signed event log queryable by timestamp
- Node liveness registry
- Structured logging with correlation IDs
- Prometheus metrics
- Health checks (liveness and readiness)

All state lives in memory and is lost when the process exits.
"""
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from . import __version__
from .config import Settings, get_settings
from .logging import setup_logging, get_logger
from .api.router import router
from .middleware import (
    CorrelationIdMiddleware,
    ErrorHandlerMiddleware,
    MetricsMiddleware,
    ValidationMiddleware,
)
from .metrics import Metrics
from .health import HealthChecker
from .server import MasterServer

logger = get_logger()


def create_app(server: MasterServer | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the HTTP application around a coordination server.

    Args:
        server: Server shared by every request (defaults to a fresh in-memory server)
        settings: Configuration (defaults to environment-derived settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    server = server if server is not None else MasterServer()

    setup_logging(
        json_output=settings.LOG_JSON,
        service_name=settings.SERVICE_NAME,
        level=settings.LOG_LEVEL,
    )

    metrics = Metrics(service_name=settings.SERVICE_NAME, version=__version__)
    metrics.track_stores(server.event_log, server.node_registry)
    health_checker = HealthChecker(server, service_name=settings.SERVICE_NAME, version=__version__)

    app = FastAPI(
        title="meshcoord",
        version=__version__,
        description="Event log and node registry for ad-hoc network coordination",
    )
    app.state.server = server
    app.state.metrics = metrics
    app.state.health_checker = health_checker

    # Last added runs first: correlation ID must be bound before anything logs
    app.add_middleware(ValidationMiddleware, max_size=settings.MAX_EVENT_SIZE)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(MetricsMiddleware, metrics=metrics)
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(router)

    app.mount("/metrics", make_asgi_app(registry=metrics.registry))

    @app.get("/health")
    async def health():
        """
        Liveness probe - basic health check.

        Returns 200 if service is running.
        """
        logger.debug("health_check_liveness")
        return health_checker.liveness()

    @app.get("/health/ready")
    async def health_ready():
        """
        Readiness probe.

        Returns:
            200: Service is ready to handle traffic
            503: Service is not ready
        """
        logger.debug("health_check_readiness")
        metrics.update_system_metrics()
        result = health_checker.readiness()
        status_code = 200 if result["status"] == "ready" else 503
        return JSONResponse(result, status_code=status_code)

    @app.on_event("startup")
    async def startup_event():
        logger.info(
            "service_starting",
            version=__version__,
            env=settings.ENV,
            events=server.event_log.count(),
            nodes=server.node_registry.count(),
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("service_stopping")
        metrics.app_up.labels(service=settings.SERVICE_NAME, version=__version__).set(0)

    return app


settings = get_settings()
app = create_app(settings=settings)


def run():
    import uvicorn

    uvicorn.run(
        "meshcoord.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
    )


if __name__ == "__main__":
    run()
