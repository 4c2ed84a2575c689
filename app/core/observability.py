"""Observability setup: logging, tracing, metrics, and error tracking."""

import logging
import time
import uuid

import sentry_sdk
import structlog
from fastapi import FastAPI, Request, Response
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.routing import Match

from app.core.config import get_settings

settings = get_settings()

# Prometheus metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

REDIRECT_COUNT = Counter(
    "redirects_total",
    "Total short code redirects",
    ["status_code"],
)

LINK_OPERATIONS = Counter(
    "link_operations_total",
    "Total link registry write operations",
    ["operation"],  # create, delete
)


def route_template(request: Request) -> str:
    """Label a request by the path template of the route it hits.

    Short codes collapse into ``/{code}`` so metric labels stay
    low-cardinality. A path matched only with the wrong method keeps its
    template; a path no route matches is labelled ``unmatched``.
    """
    partial = None
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return route.path
        if match == Match.PARTIAL and partial is None:
            partial = route.path
    return partial or "unmatched"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the structlog context and the response.

    An incoming X-Request-ID header is reused, otherwise a UUID4 is generated.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its duration and update HTTP metrics."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        logger = structlog.get_logger()
        start_time = time.perf_counter()

        logger.info(
            "Request started",
            client_ip=request.client.host if request.client else None,
            user_agent=request.headers.get("User-Agent"),
        )

        response = await call_next(request)
        duration = time.perf_counter() - start_time

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        endpoint = route_template(request)
        REQUEST_COUNT.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        REQUEST_LATENCY.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

        return response


def configure_structlog() -> None:
    """Configure structlog for JSON logging with context variables."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if settings.debug else logging.INFO,
    )


def setup_opentelemetry(app: FastAPI) -> None:
    """Export traces over OTLP when an endpoint is configured."""
    if not settings.otlp_endpoint:
        structlog.get_logger().info("OpenTelemetry disabled (no OTLP endpoint configured)")
        return

    provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: "shortlink-api"}))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app)

    structlog.get_logger().info(
        "OpenTelemetry configured",
        otlp_endpoint=settings.otlp_endpoint,
    )


def setup_sentry() -> None:
    """Report unhandled errors to Sentry when a DSN is configured."""
    if not settings.sentry_dsn:
        structlog.get_logger().info("Sentry disabled (no DSN configured)")
        return

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment="development" if settings.debug else "production",
        traces_sample_rate=0.1,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

    structlog.get_logger().info("Sentry configured")


def setup_observability(app: FastAPI) -> None:
    """Configure logging, error tracking and tracing, and mount /metrics."""
    configure_structlog()
    setup_sentry()
    setup_opentelemetry(app)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    structlog.get_logger().info("Observability setup complete")


def record_redirect(status_code: int) -> None:
    """Record a redirect attempt in Prometheus metrics."""
    REDIRECT_COUNT.labels(status_code=status_code).inc()


def record_link_operation(operation: str) -> None:
    """Record a link write operation in Prometheus metrics."""
    LINK_OPERATIONS.labels(operation=operation).inc()
