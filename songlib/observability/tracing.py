import logging
import os
from typing import Dict, Optional

from flask import Flask

import songlib

try:
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.flask import FlaskInstrumentor
    from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
except ImportError:  # pragma: no cover - optional dependency
    FlaskInstrumentor = None  # type: ignore

logger = logging.getLogger(__name__)


def _setting(app: Flask, name: str) -> Optional[str]:
    return app.config.get(name) or os.getenv(name)


def parse_otlp_headers(raw: Optional[str]) -> Dict[str, str]:
    """Turn ``key=value,key2=value2`` into a header dict; malformed pairs are skipped."""
    headers = {}
    for pair in (raw or "").split(","):
        key, sep, value = pair.partition("=")
        if sep and key.strip():
            headers[key.strip()] = value.strip()
    return headers


def init_tracing(app: Flask, engine=None) -> bool:
    """Export request and catalog query spans over OTLP when an endpoint is configured."""
    endpoint = _setting(app, "OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        return False
    if FlaskInstrumentor is None:
        logger.warning("OTEL_EXPORTER_OTLP_ENDPOINT is set but the otel extra is not installed")
        return False

    resource = Resource.create(
        {
            "service.name": app.config.get("OTEL_SERVICE_NAME", "song-library"),
            "service.version": songlib.__version__,
        }
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=endpoint,
                headers=parse_otlp_headers(_setting(app, "OTEL_EXPORTER_OTLP_HEADERS")),
                insecure=app.config.get("OTEL_EXPORTER_OTLP_INSECURE", True),
            )
        )
    )
    trace.set_tracer_provider(provider)

    FlaskInstrumentor().instrument_app(app)
    if engine is not None:
        SQLAlchemyInstrumentor().instrument(engine=engine)
    logger.info("OpenTelemetry tracing enabled (endpoint=%s)", endpoint)
    return True
