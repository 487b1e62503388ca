"""
Channel-Aware Structured Logging for SBCT.

Provides semantic logging channels with level-based filtering:
- PIPELINE: pass start/end, timing
- EXTRACT: block splitting and field extraction
- NORMALIZE: disposition/attribute/equipment rewrites
- COMPOSE: narrative assembly
- VALIDATE: rule evaluation and scoring
- CORRECT: fix detection and application
- SYSTEM: errors, warnings, status

Log Levels:
- SILENT (0): No logging
- INFO (1): Key milestones only
- VERBOSE (2): Detailed operations
- DEBUG (3): Everything

Configuration via environment:
- SBCT_LOG_LEVEL: Global level (silent/info/verbose/debug)
- SBCT_LOG_FORMAT: Output format (console/json)
- SBCT_LOG_CHANNELS: Comma-separated channel filter (all if not set)

Log output goes to stderr so converted text on stdout stays clean.
"""

import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Optional, Union

import structlog


# =============================================================================
# Enums
# =============================================================================

class LogLevel(IntEnum):
    """Log verbosity levels."""
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse log level from string."""
        mapping = {
            "silent": cls.SILENT,
            "info": cls.INFO,
            "verbose": cls.VERBOSE,
            "debug": cls.DEBUG,
            "warning": cls.INFO,
            "error": cls.INFO,
        }
        return mapping.get(s.strip().lower(), cls.INFO)


class LogChannel(str, Enum):
    """Semantic log channels."""
    PIPELINE = "PIPELINE"     # Pass orchestration
    EXTRACT = "EXTRACT"       # Splitting and field extraction
    NORMALIZE = "NORMALIZE"   # Canonicalization rewrites
    COMPOSE = "COMPOSE"       # Narrative assembly
    VALIDATE = "VALIDATE"     # Rule evaluation
    CORRECT = "CORRECT"       # Fix generation
    SYSTEM = "SYSTEM"         # Errors, warnings, status

    @classmethod
    def all(cls) -> list["LogChannel"]:
        """Return all channels."""
        return list(cls)

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        """Parse channel from string."""
        try:
            return cls(s.strip().upper())
        except ValueError:
            return None


# =============================================================================
# Configuration
# =============================================================================

_request_context: ContextVar[dict] = ContextVar("sbct_log_context", default={})

_config = {
    "level": LogLevel.INFO,
    "format": "console",
    "channels": set(LogChannel.all()),
    "configured": False,
}


def _parse_channels(raw: list[Union[LogChannel, str]]) -> list[LogChannel]:
    parsed = []
    for ch in raw:
        if isinstance(ch, LogChannel):
            parsed.append(ch)
            continue
        channel = LogChannel.from_string(ch)
        if channel:
            parsed.append(channel)
    return parsed


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[list[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Log level (LogLevel enum or string)
        format: Output format ("console" or "json")
        channels: List of channels to enable (all if None)
        force: Force reconfiguration if already configured
    """
    if _config["configured"] and not force:
        return

    if level is None:
        level = LogLevel.from_string(os.environ.get("SBCT_LOG_LEVEL", "info"))
    elif isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("SBCT_LOG_FORMAT", "console")

    if channels is None:
        channels_str = os.environ.get("SBCT_LOG_CHANNELS", "")
        parsed = _parse_channels(channels_str.split(",")) if channels_str else []
        channels = parsed or LogChannel.all()
    else:
        channels = _parse_channels(channels)

    _config["level"] = level
    _config["format"] = format
    _config["channels"] = set(channels)

    stdlib_level = {
        LogLevel.SILENT: logging.CRITICAL + 10,
        LogLevel.INFO: logging.INFO,
        LogLevel.VERBOSE: logging.DEBUG,
        LogLevel.DEBUG: logging.DEBUG,
    }.get(level, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=stdlib_level,
        force=True,
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _config["configured"] = True


# =============================================================================
# Channel Logger
# =============================================================================

class ChannelLogger:
    """
    A logger bound to a specific channel.

    - info(): Key milestones (level >= INFO)
    - verbose(): Detailed operations (level >= VERBOSE)
    - debug(): Everything (level >= DEBUG)
    - error()/warning(): Always logged unless SILENT
    """

    def __init__(
        self,
        channel: LogChannel,
        name: Optional[str] = None,
        pass_name: Optional[str] = None,
    ):
        self.channel = channel
        self.name = name or f"sbct.{channel.value.lower()}"
        self.pass_name = pass_name
        self._logger = structlog.get_logger(self.name)

    def _should_log(self, msg_level: LogLevel) -> bool:
        if self.channel not in _config["channels"]:
            return False
        return _config["level"] >= msg_level

    def _make_event(self, **kwargs) -> dict:
        data = {"channel": self.channel.value, **kwargs}
        if self.pass_name:
            data["pass"] = self.pass_name
        ctx = _request_context.get()
        if ctx:
            data.update(ctx)
        return data

    def info(self, event: str, **kwargs) -> None:
        """Log at INFO level (key milestones)."""
        if not self._should_log(LogLevel.INFO):
            return
        self._logger.info(event, **self._make_event(**kwargs))

    def verbose(self, event: str, **kwargs) -> None:
        """Log at VERBOSE level (detailed operations)."""
        if not self._should_log(LogLevel.VERBOSE):
            return
        self._logger.debug(event, **self._make_event(verbosity="verbose", **kwargs))

    def debug(self, event: str, **kwargs) -> None:
        """Log at DEBUG level (everything)."""
        if not self._should_log(LogLevel.DEBUG):
            return
        self._logger.debug(event, **self._make_event(verbosity="debug", **kwargs))

    def error(self, event: str, **kwargs) -> None:
        if _config["level"] == LogLevel.SILENT:
            return
        self._logger.error(event, **self._make_event(**kwargs))

    def warning(self, event: str, **kwargs) -> None:
        if _config["level"] == LogLevel.SILENT:
            return
        self._logger.warning(event, **self._make_event(**kwargs))

    def bind(self, **kwargs) -> "ChannelLogger":
        """Create a new logger with additional bound context."""
        new_logger = ChannelLogger(
            channel=self.channel,
            name=self.name,
            pass_name=self.pass_name,
        )
        new_logger._logger = self._logger.bind(**kwargs)
        return new_logger


# =============================================================================
# Logger Factory Functions
# =============================================================================

# Pass-number prefix -> channel
_PASS_CHANNELS = {
    "p00": LogChannel.PIPELINE,
    "p05": LogChannel.CORRECT,
    "p10": LogChannel.EXTRACT,
    "p20": LogChannel.EXTRACT,
    "p30": LogChannel.EXTRACT,
    "p40": LogChannel.VALIDATE,
    "p50": LogChannel.COMPOSE,
    "p60": LogChannel.CORRECT,
    "p80": LogChannel.PIPELINE,
}


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """
    Get a channel-specific logger.

    Args:
        channel: The log channel (default: SYSTEM)
    """
    configure_logging()

    if isinstance(channel, str) and not isinstance(channel, LogChannel):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM

    return ChannelLogger(channel=channel)


def get_pass_logger(pass_name: str, channel: Optional[LogChannel] = None) -> ChannelLogger:
    """
    Get a logger for a specific pipeline pass.

    Args:
        pass_name: The pass name (e.g., "p20_extract_fields")
        channel: The log channel (auto-detected from the pNN prefix if None)
    """
    configure_logging()

    if channel is None:
        channel = _PASS_CHANNELS.get(pass_name[:3], LogChannel.PIPELINE)

    return ChannelLogger(
        channel=channel,
        name=f"sbct.{pass_name}",
        pass_name=pass_name,
    )


# =============================================================================
# Request Context Management
# =============================================================================

def bind_request_context(**kwargs) -> None:
    """Bind context that will be included in all log messages."""
    ctx = _request_context.get().copy()
    ctx.update(kwargs)
    _request_context.set(ctx)


def clear_request_context() -> None:
    _request_context.set({})


# =============================================================================
# TransformLogger
# =============================================================================

class TransformLogger:
    """
    Request-scoped logger used by the engine.

    Binds the request id into every log message until the
    transform completes.
    """

    def __init__(self, request_id: str):
        self.request_id = request_id
        self._pipeline_log = get_logger(LogChannel.PIPELINE)
        self._start_time = datetime.now()
        self._pass_times: dict[str, float] = {}

        bind_request_context(request_id=request_id)

    def pass_start(self, pass_name: str) -> None:
        self._pass_times[pass_name] = datetime.now().timestamp()
        self._pipeline_log.verbose("pass_started", pass_name=pass_name)

    def pass_end(self, pass_name: str, **metrics: Any) -> None:
        """Log the end of a pipeline pass with timing."""
        start = self._pass_times.get(pass_name, datetime.now().timestamp())
        duration_ms = (datetime.now().timestamp() - start) * 1000

        self._pipeline_log.verbose(
            "pass_completed",
            pass_name=pass_name,
            duration_ms=round(duration_ms, 2),
            **metrics,
        )

    def pass_error(self, pass_name: str, error: Exception) -> None:
        self._pipeline_log.error(
            "pass_failed",
            pass_name=pass_name,
            error=str(error),
            error_type=type(error).__name__,
        )

    def transform_complete(self, status: str, **metrics: Any) -> None:
        """Log transformation completion with summary."""
        total_ms = (datetime.now() - self._start_time).total_seconds() * 1000

        self._pipeline_log.info(
            "transform_complete",
            status=status,
            total_duration_ms=round(total_ms, 2),
            **metrics,
        )

        clear_request_context()


# =============================================================================
# Convenience Functions
# =============================================================================

def get_current_config() -> dict:
    """Get the current logging configuration (for testing/debugging)."""
    return {
        "level": _config["level"].name,
        "format": _config["format"],
        "channels": sorted(ch.value for ch in _config["channels"]),
    }
