"""
Fiserv DNA message extraction.
"""

import logging

from swiftparser.core.exceptions import MissingFieldError
from swiftparser.extraction import (
    extraction_error,
    load_json_object,
    logged_extraction,
    require_text,
    try_json_object,
)
from swiftparser.records import ParsedRecord, ParseMetadata

logger = logging.getLogger(__name__)

FORMAT_FAMILY = "FISERV"
DNA_PREFIX = "DNA"

DNA_FIELDS = (
    "transactionId",
    "accountNumber",
    "amount",
    "currency",
    "valueDate",
    "description",
    "customerName",
    "branchCode",
)


def _is_dna_id(value) -> bool:
    return isinstance(value, str) and value.startswith(DNA_PREFIX)


class FiservParser:
    """Extractor for Fiserv DNA JSON payloads."""

    SUPPORTED_SYSTEMS = ("DNA",)
    SUPPORTED_FORMATS = ("JSON",)

    def detect_format(self, message: str) -> str:
        data = try_json_object(message)
        if data is not None and _is_dna_id(data.get("transactionId")):
            return "DNA"
        return "UNKNOWN"

    def parse_dna(self, json_message: str) -> ParsedRecord:
        operation = "Fiserv DNA"
        with logged_extraction(logger, operation, json_message):
            require_text(json_message, operation, FORMAT_FAMILY)
            data = load_json_object(json_message, operation, FORMAT_FAMILY)

            if not _is_dna_id(data.get("transactionId")):
                raise extraction_error(
                    MissingFieldError,
                    operation,
                    "missing or invalid transactionId",
                    FORMAT_FAMILY,
                    field_name="transactionId",
                )

            return ParsedRecord(
                message_type="FISERV_DNA",
                metadata=ParseMetadata(parser=FORMAT_FAMILY, format="DNA"),
                fields={key: data.get(key) for key in DNA_FIELDS},
            )
