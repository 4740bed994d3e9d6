"""OpenTelemetry instrumentation helpers.

Provides:
- Tracer access for spans
- Function decorators for automatic span creation

Until init_telemetry() is called, spans go to the global no-op provider.
"""

import sys
from functools import wraps
from typing import Any, Callable

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor


# Global tracer provider (initialized once)
_tracer_provider: TracerProvider | None = None


def init_telemetry(service_name: str = "paperhand", console: bool = False) -> None:
    """Initialize OpenTelemetry tracing.

    Call this once at application startup.

    Args:
        service_name: Name of the service for traces (default: "paperhand")
        console: Print finished spans to stderr

    Example:
        >>> from paperhand_common import init_telemetry
        >>> init_telemetry(service_name="paperhand-cli", console=True)
    """
    global _tracer_provider

    if _tracer_provider is not None:
        return  # Already initialized

    _tracer_provider = TracerProvider()

    if console:
        exporter = ConsoleSpanExporter(service_name=service_name, out=sys.stderr)
        _tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))

    trace.set_tracer_provider(_tracer_provider)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer for creating spans.

    Args:
        name: Tracer name (typically module name like "paperhand_text.injector")

    Returns:
        Tracer instance (a proxy until a provider is installed)

    Example:
        >>> tracer = get_tracer("paperhand_text")
        >>> with tracer.start_as_current_span("split_sentences"):
        ...     pass
    """
    return trace.get_tracer(name)


def instrument_function(span_name: str | None = None) -> Callable:
    """Decorator to automatically create a span for a function.

    Args:
        span_name: Name for the span (default: function name)

    Returns:
        Decorator function

    Example:
        >>> @instrument_function("normalize_extract")
        ... def normalize_extract(extract, options):
        ...     ...
    """

    def decorator(func: Callable) -> Callable:
        actual_span_name = span_name or func.__name__
        tracer = get_tracer(func.__module__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(actual_span_name):
                return func(*args, **kwargs)

        return wrapper

    return decorator
