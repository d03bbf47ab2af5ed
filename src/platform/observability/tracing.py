"""
OpenTelemetry tracing configuration for distributed observability.

Provides:
- Auto-instrumentation for FastAPI, SQLAlchemy, Redis
- Context propagation across deferred task payloads
- OTLP export (Jaeger / Tempo) and console export for local debugging
"""

import os
from typing import Any

from opentelemetry import context as otel_context, trace
from opentelemetry.context import Context
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.propagate import extract, inject
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON


class TracingConfig:
    """
    Usage:
        # Initialize once at app startup
        tracing = TracingConfig(service_name="popcorn-booking")
        tracing.setup()
    """

    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        enable_console: bool = False,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
        self.enable_console = (
            enable_console or os.getenv('OTEL_CONSOLE_EXPORT', 'false').lower() == 'true'
        )

        self._provider: TracerProvider | None = None

    def setup(self) -> None:
        """Install the global tracer provider. Call once at startup."""
        resource = Resource(attributes={SERVICE_NAME: self.service_name})

        # Keep everything at the SDK; sample in the collector
        self._provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        if self.otlp_endpoint:
            self._provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint))
            )

        if self.enable_console:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._provider)

    def instrument_fastapi(self, *, app: Any, excluded_urls: str = 'health,metrics') -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    def instrument_sqlalchemy(self, *, engine: Any) -> None:
        if hasattr(engine, 'sync_engine'):  # AsyncEngine
            SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)
        else:
            SQLAlchemyInstrumentor().instrument(engine=engine)

    def instrument_redis(self) -> None:
        RedisInstrumentor().instrument()

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()


def inject_trace_context(*, headers: dict[str, str] | None = None) -> dict[str, str]:
    """
    Inject the current trace context into a carrier stored with a deferred task.

    Returns:
        Carrier dict, e.g. {"traceparent": "00-{trace_id}-{span_id}-01"}
    """
    headers = headers or {}
    inject(headers)
    return headers


def extract_trace_context(*, headers: dict[str, str] | None = None) -> Context:
    """
    Extract the trace context saved with a deferred task so the worker's spans
    continue the trace of the request that scheduled it.

    Returns:
        Context object with extracted trace context, or current context if no headers
    """
    if headers:
        return extract(headers)
    return otel_context.get_current()
