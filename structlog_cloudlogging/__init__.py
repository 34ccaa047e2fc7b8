"""structlog configuration for Google Cloud Logging structured JSON."""

from structlog_cloudlogging.config import (
    Config,
    SamplingConfig,
    new_development_config,
    new_production_config,
)
from structlog_cloudlogging.encoder_config import (
    SOURCE_LOCATION_KEY,
    EncoderConfig,
    new_development_encoder_config,
    new_production_encoder_config,
)
from structlog_cloudlogging.exceptions import CloudLoggingError, InvalidLevelError, SinkError
from structlog_cloudlogging.fields import (
    SCALAR,
    STRUCTURED,
    Encoding,
    FieldEncoder,
    LogMarshaler,
    ScalarFieldEncoder,
    SourceLocation,
    StructuredFieldEncoder,
    Timestamp,
    encode_duration,
    encode_source_location,
    encode_timestamp,
)
from structlog_cloudlogging.levels import DEFAULT_SEVERITY, SEVERITY, Level, encode_severity
from structlog_cloudlogging.logging_config import configure_logging, get_logger

__all__ = [
    "DEFAULT_SEVERITY",
    "SCALAR",
    "SEVERITY",
    "SOURCE_LOCATION_KEY",
    "STRUCTURED",
    "CloudLoggingError",
    "Config",
    "EncoderConfig",
    "Encoding",
    "FieldEncoder",
    "InvalidLevelError",
    "Level",
    "LogMarshaler",
    "SamplingConfig",
    "ScalarFieldEncoder",
    "SinkError",
    "SourceLocation",
    "StructuredFieldEncoder",
    "Timestamp",
    "configure_logging",
    "encode_duration",
    "encode_severity",
    "encode_source_location",
    "encode_timestamp",
    "get_logger",
    "new_development_config",
    "new_development_encoder_config",
    "new_production_config",
    "new_production_encoder_config",
]
