# ─────────────────────────────────────────────────────────────────────────────
# Logging Configuration — structlog for Cloud Logging
# ─────────────────────────────────────────────────────────────────────────────


import logging

import structlog

from structlog_cloudlogging.config import Config, new_production_config
from structlog_cloudlogging.fields import Encoding
from structlog_cloudlogging.processors import (
    CloudLoggingFields,
    InitialFields,
    LevelColumn,
    StacktraceAdder,
    TimestampStamper,
)
from structlog_cloudlogging.sampling import Sampler
from structlog_cloudlogging.sinks import SinkHandler

logger = structlog.get_logger(__name__)


def _shared_processors(config: Config) -> list[structlog.typing.Processor]:
    """Processors run for structlog events and foreign stdlib records alike."""
    encoder_config = config.encoder_config
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if encoder_config.time_key is not None:
        processors.append(TimestampStamper(key=encoder_config.time_key))
    if config.initial_fields:
        processors.append(InitialFields(dict(config.initial_fields)))
    if not config.disable_caller:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.PATHNAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                }
            )
        )
    if not config.disable_stacktrace:
        processors.append(StacktraceAdder(config.stacktrace_level))
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    return processors


def _renderers(config: Config) -> list[structlog.typing.Processor]:
    match config.encoding:
        case Encoding.json:
            return [structlog.processors.JSONRenderer()]
        case Encoding.console:
            return [
                LevelColumn(config.encoder_config.level_key),
                structlog.dev.ConsoleRenderer(
                    colors=False,
                    event_key=config.encoder_config.message_key,
                    timestamp_key=config.encoder_config.time_key or "timestamp",
                ),
            ]


def configure_logging(config: Config | None = None) -> None:
    """Configure structlog and the root logger to emit Cloud Logging records.

    Defaults to new_production_config(). Replaces any handlers already on
    the root logger. Raises SinkError if an output path cannot be opened.
    """
    config = config or new_production_config()
    shared_processors = _shared_processors(config)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    # Foreign (plain stdlib) records go through the shared chain inside the
    # formatter; structlog events already did in structlog.configure().
    # CloudLoggingFields needs `_record`, so it runs before remove_processors_meta.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            CloudLoggingFields(config.encoder_config, config.encoding.field_encoder()),
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderers(config),
        ],
    )

    handler = SinkHandler(
        config.output_paths,
        config.error_output_paths,
        terminator=config.encoder_config.line_ending,
    )
    handler.setFormatter(formatter)
    if config.sampling is not None:
        handler.addFilter(Sampler.from_config(config.sampling))

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
        if isinstance(old, SinkHandler):
            old.close()
    root.addHandler(handler)
    root.setLevel(int(config.level))

    logger.debug(
        "logging_configured",
        min_level=config.level.name,
        development=config.development,
        encoding=str(config.encoding),
        outputs=list(config.output_paths),
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger bound to the configuration installed by configure_logging()."""
    return structlog.stdlib.get_logger(name)
