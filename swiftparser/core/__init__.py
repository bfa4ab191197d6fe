"""
swiftparser core: exceptions, configuration and structured logging.
"""

from .exceptions import (
    SwiftParserException,
    ConfigurationException,
    InvalidInputError,
    InvalidFormatError,
    StructuralMismatchError,
    UnsupportedTypeError,
    MissingFieldError,
    MalformedValueError,
    InvalidAmountFormatError,
    FormatMismatchError,
    UnsupportedFormatError,
    EnterpriseRequiredError,
)
from .config import (
    Environment,
    LogLevel,
    ParserConfig,
    get_config,
    set_config,
    load_config,
)
from .structured_logging import (
    LogCategory,
    LogContext,
    LogEvent,
    StructuredFormatter,
    PerformanceLogger,
    configure_logging,
    setup_logging,
)

__all__ = [
    "SwiftParserException",
    "ConfigurationException",
    "InvalidInputError",
    "InvalidFormatError",
    "StructuralMismatchError",
    "UnsupportedTypeError",
    "MissingFieldError",
    "MalformedValueError",
    "InvalidAmountFormatError",
    "FormatMismatchError",
    "UnsupportedFormatError",
    "EnterpriseRequiredError",
    "Environment",
    "LogLevel",
    "ParserConfig",
    "get_config",
    "set_config",
    "load_config",
    "LogCategory",
    "LogContext",
    "LogEvent",
    "StructuredFormatter",
    "PerformanceLogger",
    "configure_logging",
    "setup_logging",
]
