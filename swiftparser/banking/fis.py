"""
FIS Systematics message extraction: fixed-width, JSON and pipe-delimited
variants.
"""

import logging
import re
from typing import Any, Dict

from swiftparser.core.exceptions import InvalidFormatError, MissingFieldError
from swiftparser.extraction import (
    extraction_error,
    load_json_object,
    logged_extraction,
    require_min_length,
    require_text,
    to_float,
    try_json_object,
)
from swiftparser.banking.layouts import (
    FIS_DELIMITED_FIELDS,
    FIS_DELIMITED_MIN_FIELDS,
    FIS_FIXED_LAYOUT,
    FIS_FIXED_MIN_LENGTH,
    slice_record,
)
from swiftparser.records import ParsedRecord, ParseMetadata

logger = logging.getLogger(__name__)

FORMAT_FAMILY = "FIS"

JSON_FIELDS = (
    "transactionId",
    "accountNumber",
    "amount",
    "currency",
    "valueDate",
    "transactionType",
    "description",
    "customerName",
    "branchCode",
)

RECORD_TYPE_PATTERN = re.compile(r"^\d{2}")


def _record(label: str, variant: str, fields: Dict[str, Any]) -> ParsedRecord:
    return ParsedRecord(
        message_type=f"{FORMAT_FAMILY}_{label}",
        metadata=ParseMetadata(parser=FORMAT_FAMILY, format=variant),
        fields=fields,
    )


class FISParser:
    """Extractor for FIS Systematics payloads."""

    SUPPORTED_FORMATS = ("FIXED_WIDTH", "JSON", "DELIMITED")

    def detect_format(self, message: str) -> str:
        """Classify a payload as one of this system's sub-formats."""
        data = try_json_object(message)
        if data is not None and data.get("transactionId") and data.get("accountNumber"):
            return "JSON"

        if "|" in message and len(message.split("|")) > 5:
            return "DELIMITED"

        if len(message) > FIS_FIXED_MIN_LENGTH and RECORD_TYPE_PATTERN.match(message):
            return "FIXED_WIDTH"

        return "UNKNOWN"

    def parse_fixed_width(self, fixed_width_message: str) -> ParsedRecord:
        """
        Slice a fixed-width record.

        The amount column holds integer cents and is divided by 100.
        """
        operation = "FIS fixed width"
        with logged_extraction(logger, operation, fixed_width_message):
            require_min_length(fixed_width_message, FIS_FIXED_MIN_LENGTH, operation, FORMAT_FAMILY)

            fields: Dict[str, Any] = slice_record(fixed_width_message, FIS_FIXED_LAYOUT)
            fields["amount"] = to_float(fields["amount"], "amount", operation, FORMAT_FAMILY) / 100
            return _record("FIXED", "FIXED_WIDTH", fields)

    def parse_json(self, json_message: str) -> ParsedRecord:
        operation = "FIS JSON"
        with logged_extraction(logger, operation, json_message):
            require_text(json_message, operation, FORMAT_FAMILY)
            data = load_json_object(json_message, operation, FORMAT_FAMILY)

            if not data.get("transactionId"):
                raise extraction_error(
                    MissingFieldError,
                    operation,
                    "missing transactionId",
                    FORMAT_FAMILY,
                    field_name="transactionId",
                )

            return _record("JSON", "JSON", {key: data.get(key) for key in JSON_FIELDS})

    def parse_delimited(self, delimited_message: str) -> ParsedRecord:
        operation = "FIS delimited"
        with logged_extraction(logger, operation, delimited_message):
            require_text(delimited_message, operation, FORMAT_FAMILY)
            segments = delimited_message.split("|")

            if len(segments) < FIS_DELIMITED_MIN_FIELDS:
                raise extraction_error(
                    InvalidFormatError,
                    operation,
                    f"insufficient fields ({len(segments)} < {FIS_DELIMITED_MIN_FIELDS})",
                    FORMAT_FAMILY,
                )

            # Branch code is the only optional trailing segment
            segments += [""] * (len(FIS_DELIMITED_FIELDS) - len(segments))
            fields: Dict[str, Any] = dict(zip(FIS_DELIMITED_FIELDS, segments))
            fields["amount"] = to_float(fields["amount"], "amount", operation, FORMAT_FAMILY)
            return _record("DELIMITED", "DELIMITED", fields)
