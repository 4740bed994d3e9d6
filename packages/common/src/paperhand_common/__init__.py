"""Paperhand Common - Shared utilities.

Version: 1.0.0

This package provides:
- Settings (pydantic-settings)
- Structured logging (structlog)
- OpenTelemetry instrumentation helpers
- Custom error types
"""

from paperhand_common.config import Settings, get_settings
from paperhand_common.errors import (
    NoTextExtractedError,
    NormalizationError,
    PaperhandError,
    PayloadError,
)
from paperhand_common.instrumentation import (
    get_tracer,
    init_telemetry,
    instrument_function,
)
from paperhand_common.logging_config import configure_logging, get_logger

__version__ = "1.0.0"

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    # Instrumentation
    "init_telemetry",
    "get_tracer",
    "instrument_function",
    # Errors
    "PaperhandError",
    "NormalizationError",
    "NoTextExtractedError",
    "PayloadError",
]
