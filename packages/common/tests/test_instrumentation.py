"""Tests for OpenTelemetry instrumentation helpers."""

import pytest

from paperhand_common.instrumentation import (
    get_tracer,
    init_telemetry,
    instrument_function,
)


class TestInitTelemetry:
    """Tests for init_telemetry function."""

    def test_init_telemetry_creates_provider(self):
        """init_telemetry installs a tracer provider."""
        import paperhand_common.instrumentation as instr

        instr._tracer_provider = None

        init_telemetry(service_name="test-service")

        assert instr._tracer_provider is not None

    def test_init_telemetry_idempotent(self):
        """init_telemetry can be called multiple times safely."""
        import paperhand_common.instrumentation as instr

        instr._tracer_provider = None

        init_telemetry()
        provider1 = instr._tracer_provider

        init_telemetry()
        provider2 = instr._tracer_provider

        assert provider1 is provider2


class TestGetTracer:
    """Tests for get_tracer function."""

    def test_get_tracer_returns_tracer(self):
        """get_tracer returns an object able to start spans."""
        tracer = get_tracer("test_module")

        assert hasattr(tracer, "start_as_current_span")
        assert callable(tracer.start_as_current_span)

    def test_span_usable_without_init(self):
        """Spans can be opened before any provider is installed."""
        tracer = get_tracer("no_init_test")

        with tracer.start_as_current_span("noop"):
            pass


class TestInstrumentFunction:
    """Tests for instrument_function decorator."""

    def test_instrument_sync_function(self):
        """Decorator works with sync functions."""

        @instrument_function("test_span")
        def sync_func(x: int) -> int:
            return x * 2

        assert sync_func(5) == 10

    def test_instrument_preserves_function_metadata(self):
        """Decorator preserves function name and docstring."""

        @instrument_function("custom_span")
        def documented_function() -> None:
            """This is a documented function."""
            pass

        assert documented_function.__name__ == "documented_function"
        assert documented_function.__doc__ == "This is a documented function."

    def test_instrument_with_args_and_kwargs(self):
        """Decorator passes args and kwargs correctly."""

        @instrument_function()
        def func_with_params(a: int, b: int, *, c: int = 0) -> int:
            return a + b + c

        assert func_with_params(1, 2, c=3) == 6

    def test_instrument_sync_with_exception(self):
        """Sync decorator propagates exceptions."""

        @instrument_function()
        def raises_sync_error() -> None:
            raise RuntimeError("Sync error")

        with pytest.raises(RuntimeError, match="Sync error"):
            raises_sync_error()
