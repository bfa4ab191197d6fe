"""
TCS BaNCS message extraction: XML, JSON and flat-file variants.
"""

import logging
import re
from typing import Any, Dict, Optional

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
    BANCS_FLAT_LAYOUT,
    BANCS_FLAT_MIN_LENGTH,
    slice_record,
)
from swiftparser.records import ParsedRecord, ParseMetadata

logger = logging.getLogger(__name__)

FORMAT_FAMILY = "BANCS"

JSON_FIELDS = (
    "transactionId",
    "accountNumber",
    "amount",
    "currency",
    "valueDate",
    "description",
    "customerName",
    "branchCode",
)

XML_FIELDS = {
    "transactionId": "TransactionID",
    "currency": "Currency",
    "debitAccount": "DebitAccount",
    "creditAccount": "CreditAccount",
    "description": "Description",
}


def _record(variant: str, fields: Dict[str, Any]) -> ParsedRecord:
    return ParsedRecord(
        message_type=f"{FORMAT_FAMILY}_{variant}",
        metadata=ParseMetadata(parser=FORMAT_FAMILY, format=variant),
        fields=fields,
    )


class BANCSParser:
    """Extractor for TCS BaNCS core banking payloads."""

    SUPPORTED_FORMATS = ("XML", "JSON", "FLAT")

    def detect_format(self, message: str) -> str:
        """Classify a payload as one of this system's sub-formats."""
        stripped = message.strip()
        if stripped.startswith("<?xml") or stripped.startswith("<Transaction>"):
            return "XML"

        data = try_json_object(message)
        if data is not None and (data.get("transactionId") or data.get("accountNumber")):
            return "JSON"

        if "TXN" in message and "ACC" in message and len(message) > BANCS_FLAT_MIN_LENGTH:
            return "FLAT"

        return "UNKNOWN"

    @staticmethod
    def extract_xml_field(xml_message: str, element: str) -> Optional[str]:
        """Return the text of the first <element>, or None if absent."""
        match = re.search(rf"<{element}>(.*?)</{element}>", xml_message, re.DOTALL)
        return match.group(1).strip() if match else None

    def parse_xml(self, xml_message: str) -> ParsedRecord:
        operation = "BANCS XML"
        with logged_extraction(logger, operation, xml_message):
            require_text(xml_message, operation, FORMAT_FAMILY)
            if "<Transaction>" not in xml_message:
                raise extraction_error(
                    InvalidFormatError, operation, "missing Transaction element", FORMAT_FAMILY
                )

            fields: Dict[str, Any] = {
                name: self.extract_xml_field(xml_message, element)
                for name, element in XML_FIELDS.items()
            }
            amount = self.extract_xml_field(xml_message, "Amount")
            fields["amount"] = (
                to_float(amount, "Amount", operation, FORMAT_FAMILY) if amount is not None else None
            )
            return _record("XML", fields)

    def parse_json(self, json_message: str) -> ParsedRecord:
        operation = "BANCS JSON"
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

            return _record("JSON", {key: data.get(key) for key in JSON_FIELDS})

    def parse_flat(self, flat_message: str) -> ParsedRecord:
        operation = "BANCS flat file"
        with logged_extraction(logger, operation, flat_message):
            require_min_length(flat_message, BANCS_FLAT_MIN_LENGTH, operation, FORMAT_FAMILY)

            fields: Dict[str, Any] = slice_record(flat_message, BANCS_FLAT_LAYOUT)
            fields["amount"] = to_float(fields["amount"], "amount", operation, FORMAT_FAMILY)
            return _record("FLAT", fields)
