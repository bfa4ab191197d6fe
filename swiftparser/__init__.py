"""
swiftparser - Banking Message Parser

Converts banking message payloads into uniform ParsedRecords.

This package provides:
- SWIFT MT parsing (MT103, MT202, MT515, MT700, MT798, MT950, MT101)
- ISO 20022 pacs.008 extraction
- Core banking formats (TCS BaNCS, FIS, Fiserv DNA, Temenos)
- Format auto-detection and a single parsing façade with batch support
- Enterprise capability hooks (COBOL, compliance, blockchain, routing)
"""

import logging
from typing import List

from swiftparser.core.config import ParserConfig, get_config, load_config, set_config
from swiftparser.core.exceptions import (
    EnterpriseRequiredError,
    FormatMismatchError,
    InvalidAmountFormatError,
    InvalidFormatError,
    InvalidInputError,
    MalformedValueError,
    MissingFieldError,
    SwiftParserException,
    UnsupportedFormatError,
    UnsupportedTypeError,
)
from swiftparser.core.structured_logging import configure_logging, setup_logging
from swiftparser.detection import FormatDetector, detect_format
from swiftparser.formats import supported_formats
from swiftparser.parser import ParseMetrics, SwiftParserOSS
from swiftparser.records import ParsedRecord, ParseFailure, ParseMetadata, deserialize, serialize

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__: List[str] = [
    "SwiftParserOSS",
    "ParseMetrics",
    "FormatDetector",
    "detect_format",
    "supported_formats",
    "ParsedRecord",
    "ParseMetadata",
    "ParseFailure",
    "serialize",
    "deserialize",
    "ParserConfig",
    "get_config",
    "set_config",
    "load_config",
    "configure_logging",
    "setup_logging",
    "SwiftParserException",
    "InvalidInputError",
    "InvalidFormatError",
    "UnsupportedTypeError",
    "MissingFieldError",
    "MalformedValueError",
    "InvalidAmountFormatError",
    "FormatMismatchError",
    "UnsupportedFormatError",
    "EnterpriseRequiredError",
]
