"""
swiftparser - Parsing Façade

Single entry point over every extractor: validates input, resolves the
effective format (hint or detection), dispatches through the extractor
registry, stamps timing metadata and keeps running parse metrics.
"""

import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional

from prometheus_client import Counter, Histogram

from swiftparser import formats
from swiftparser.banking import BANCSParser, FISParser, FiservParser, TemenosParser
from swiftparser.core.config import ParserConfig, get_config
from swiftparser.core.exceptions import (
    FormatMismatchError,
    InvalidInputError,
    SwiftParserException,
    UnsupportedFormatError,
)
from swiftparser.core.structured_logging import LogCategory, LogContext, PerformanceLogger
from swiftparser.detection import FormatDetector
from swiftparser.enterprise import (
    EnterpriseCapabilities,
    UnavailableCapabilities,
    detect_cobol,
    parse_cobol,
)
from swiftparser.extraction import preview
from swiftparser.iso20022 import ISO20022Parser
from swiftparser.records import BatchResult, ParsedRecord, ParseFailure, serialize, utc_timestamp
from swiftparser.registry import SWIFT_LABEL_PATTERN, SWIFT_ROUTE, ExtractorRegistry
from swiftparser.swift import EnhancedSwiftMTParser, SwiftMTParser

logger = logging.getLogger(__name__)

# Metrics
PARSE_TOTAL = Counter(
    "swiftparser_parse_total", "Total parse attempts", ["format", "outcome"]
)

PARSE_LATENCY = Histogram(
    "swiftparser_parse_latency_ms",
    "Parse latency in milliseconds",
    ["format"],
    buckets=[1, 2, 5, 10, 25, 50, 100, 250, 1000],
)

_METRIC_LABELS = set(formats.SUPPORTED_FORMATS) | set(formats.ENTERPRISE_FORMATS) | {
    formats.COBOL,
    formats.UNKNOWN,
}


def _metric_label(label: Any) -> str:
    if not label:
        return "none"
    if not isinstance(label, str):
        return "other"
    upper = label.upper()
    return upper if upper in _METRIC_LABELS else "other"


@dataclass
class ParseMetrics:
    """Running counts of parse attempts."""

    total_attempted: int = 0
    successful: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalAttempted": self.total_attempted,
            "successful": self.successful,
            "failed": self.failed,
        }


class SwiftParserOSS:
    """
    Parsing façade over the SWIFT MT, ISO 20022 and core banking extractors.

    Handles:
    - Input validation and format auto-detection
    - Registry dispatch by format label or hint
    - Timing metadata and parse metrics
    - Batch parsing with per-item error capture
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        capabilities: Optional[EnterpriseCapabilities] = None,
        detector: Optional[FormatDetector] = None,
    ):
        self.config = config or get_config()
        self.config.validate()
        self.capabilities = capabilities or UnavailableCapabilities()
        self.detector = detector or FormatDetector()

        strict = self.config.strict_validation
        self.swift = SwiftMTParser(strict=strict)
        self.enhanced = EnhancedSwiftMTParser(strict=strict)
        self.bancs = BANCSParser()
        self.fis = FISParser()
        self.fiserv = FiservParser()
        self.temenos = TemenosParser()
        self.iso20022 = ISO20022Parser()

        self.registry = ExtractorRegistry()
        self._register_default_extractors()

        self._metrics = ParseMetrics()
        self._metrics_lock = threading.Lock()
        self.performance = PerformanceLogger(logger)

        logger.info(
            "SwiftParserOSS initialized",
            extra={
                "category": LogCategory.SYSTEM,
                "metadata": {"routes": self.registry.keys(), "strict": strict},
            },
        )

    def _register_default_extractors(self) -> None:
        register = self.registry.register

        register(SWIFT_ROUTE, self._parse_swift)
        register(formats.ISO20022, lambda payload, _: self.iso20022.parse_pacs008(payload))

        register(formats.BANCS_XML, lambda payload, _: self.bancs.parse_xml(payload))
        register(formats.BANCS_JSON, lambda payload, _: self.bancs.parse_json(payload))
        register(formats.BANCS_FLAT, lambda payload, _: self.bancs.parse_flat(payload))

        register(formats.FIS_FIXED, lambda payload, _: self.fis.parse_fixed_width(payload))
        register(formats.FIS_JSON, lambda payload, _: self.fis.parse_json(payload))
        register(formats.FIS_DELIMITED, lambda payload, _: self.fis.parse_delimited(payload))

        register(formats.FISERV_DNA, lambda payload, _: self.fiserv.parse_dna(payload))

        register(formats.TEMENOS_JSON, lambda payload, _: self.temenos.parse_json(payload))
        register(formats.TEMENOS_XML, lambda payload, _: self.temenos.parse_xml(payload))
        register(formats.TEMENOS_T24, lambda payload, _: self.temenos.parse_t24(payload))

        register(formats.COBOL, lambda payload, _: self._parse_cobol(payload))
        for label in formats.ENTERPRISE_FORMATS:
            register(
                label,
                lambda payload, routed: self.capabilities.parse_additional_format(payload, routed),
            )

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_input(message: Any) -> str:
        if message is None:
            raise InvalidInputError("Invalid input: message cannot be null or undefined")
        if not isinstance(message, str):
            raise InvalidInputError("Invalid input: message must be a string")
        if message.strip() == "":
            raise InvalidInputError("Invalid input: message cannot be empty")
        return message

    @staticmethod
    def _validate_hint(format: Any) -> None:
        if format is not None and not isinstance(format, str):
            raise InvalidInputError("Invalid input: format hint must be a string")

    def _parse_swift(self, message: str, label: str) -> ParsedRecord:
        # Only an MTnnn label is a type assertion; a generic hint leaves the header in charge
        assumed_type = label if SWIFT_LABEL_PATTERN.match(label) else None
        return self.enhanced.parse(message, assumed_type)

    def _parse_cobol(self, message: str) -> ParsedRecord:
        result = parse_cobol(message, self.capabilities)
        if result is None:
            raise UnsupportedFormatError("Unsupported message format", format_label=formats.COBOL)
        return result

    def _dispatch(self, message: str, label: str) -> ParsedRecord:
        route, extractor = self.registry.lookup(label)

        # Unrecognised labels still reach the COBOL capability when the text is COBOL
        if extractor is None and detect_cobol(message):
            route, extractor = self.registry.lookup(formats.COBOL)

        if extractor is None:
            raise UnsupportedFormatError("Unsupported message format", format_label=label)

        if route in formats.ENTERPRISE_FORMATS:
            return extractor(message, route)
        return extractor(message, label.strip().upper())

    def parse(self, message: Any, format: Optional[str] = None) -> ParsedRecord:
        """
        Parse a payload into a ParsedRecord.

        Args:
            message: Raw payload text
            format: Optional format hint; detection runs when omitted

        Raises:
            InvalidInputError: message is None, not a string, or blank
            UnsupportedFormatError: no extractor for the resolved format
            SwiftParserException: any extractor failure, unchanged
        """
        start_time = time.perf_counter()
        effective_format: Optional[str] = None

        with self._metrics_lock:
            self._metrics.total_attempted += 1

        try:
            self._validate_input(message)
            self._validate_hint(format)
            effective_format = format or self.detect_format(message)

            context = LogContext(component="SwiftParserOSS", operation="parse",
                                 message_format=effective_format)
            with self.performance.time_operation("parse", context):
                record = self._dispatch(message, effective_format)

            parse_time_ms = max(1, int((time.perf_counter() - start_time) * 1000))
            if isinstance(record, ParsedRecord):
                record = record.with_timing(parse_time_ms, utc_timestamp())
        except Exception as e:
            with self._metrics_lock:
                self._metrics.failed += 1
            self._observe(effective_format, "failure", start_time)
            if self.config.enable_logging:
                logger.error(
                    "Parsing failed",
                    extra={
                        "category": LogCategory.PARSING,
                        "metadata": {
                            "error": getattr(e, "message", str(e)),
                            "error_code": getattr(e, "error_code", type(e).__name__),
                            "format": format or "auto-detect",
                            "message_preview": preview(message, self.config.preview_length),
                        },
                    },
                )
            raise

        with self._metrics_lock:
            self._metrics.successful += 1
        self._observe(effective_format, "success", start_time)
        return record

    def _observe(self, label: Optional[str], outcome: str, start_time: float) -> None:
        if not self.config.enable_metrics:
            return
        metric_label = _metric_label(label)
        PARSE_TOTAL.labels(format=metric_label, outcome=outcome).inc()
        PARSE_LATENCY.labels(format=metric_label).observe(
            (time.perf_counter() - start_time) * 1000
        )

    def parse_with_format(self, message: Any, format: str) -> ParsedRecord:
        """
        Parse with an explicit format that must agree with detection.

        Detection returning UNKNOWN trusts the caller's format.
        """
        label = format.upper() if isinstance(format, str) else format
        if label not in formats.SUPPORTED_FORMATS:
            raise UnsupportedFormatError(f"Unsupported format: {format}", format_label=str(format))

        detected = self.detect_format(message)
        if detected != formats.UNKNOWN and detected != label:
            raise FormatMismatchError(
                f"Format mismatch: expected {label} but detected {detected}",
                expected=label,
                detected=detected,
            )

        return self.parse(message, label)

    def batch_parse(self, messages: Iterable[Any]) -> List[BatchResult]:
        """
        Parse each message independently, in input order.

        A failing message yields a ParseFailure in its slot and does not
        stop the batch.
        """
        results: List[BatchResult] = []

        for message in messages:
            try:
                results.append(self.parse(message))
            except SwiftParserException as e:
                results.append(ParseFailure(error=e.message, original_message=message))
            except Exception as e:
                logger.exception("Unexpected error in batch item")
                results.append(ParseFailure(error=str(e), original_message=message))

        return results

    # ------------------------------------------------------------------
    # Detection and helpers
    # ------------------------------------------------------------------

    def detect_format(self, message: Any) -> str:
        return self.detector.detect(message)

    def validate(self, message: Any) -> bool:
        """True when the message is non-blank text of a recognisable format."""
        if not isinstance(message, str) or not message.strip():
            return False
        return self.detect_format(message) != formats.UNKNOWN

    @staticmethod
    def get_supported_formats() -> List[str]:
        return formats.supported_formats()

    @staticmethod
    def to_json(record: ParsedRecord) -> str:
        return serialize(record)

    def get_metrics(self) -> ParseMetrics:
        """Snapshot of the running counters."""
        with self._metrics_lock:
            return replace(self._metrics)

    def reset_metrics(self) -> None:
        with self._metrics_lock:
            self._metrics = ParseMetrics()

    # ------------------------------------------------------------------
    # Enterprise capabilities
    # ------------------------------------------------------------------

    def transpile_cobol(self, message: Any) -> Any:
        return self.capabilities.transpile_cobol(message)

    def extract_compliance(self, record: Any) -> Dict[str, Any]:
        return self.capabilities.extract_compliance(record)

    def convert_to_blockchain(self, record: Any, network: Optional[str] = None) -> Any:
        return self.capabilities.convert_to_blockchain(record, network)

    def route_message(self, record: Any) -> Any:
        return self.capabilities.route_message(record)
