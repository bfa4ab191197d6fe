"""
Temenos T24 / Transact message extraction: JSON, XML and T24 key=value
variants.
"""

import logging
from typing import Any, Dict
from xml.etree import ElementTree as ET

from swiftparser.core.exceptions import InvalidFormatError, MissingFieldError
from swiftparser.extraction import (
    extraction_error,
    load_json_object,
    logged_extraction,
    require_text,
    to_float,
    try_json_object,
)
from swiftparser.records import ParsedRecord, ParseMetadata

logger = logging.getLogger(__name__)

FORMAT_FAMILY = "TEMENOS"
MESSAGE_ID_PREFIX = "TMN"
XML_ROOT = "TemenosTransaction"

JSON_FIELDS = ("header", "transaction", "debitAccount", "creditAccount", "narrative")

XML_FIELDS = {
    "transactionReference": "TransactionReference",
    "currency": "Currency",
    "valueDate": "ValueDate",
    "debitAccount": "DebitAccount",
    "creditAccount": "CreditAccount",
    "narrative": "Narrative",
}

T24_FIELDS = {
    "transactionReference": "TXN.REF",
    "currency": "CURRENCY",
    "valueDate": "VALUE.DATE",
    "debitAccount": "DEBIT.ACCT",
    "creditAccount": "CREDIT.ACCT",
    "narrative": "NARRATIVE",
    "customerNumber": "CUSTOMER.NO",
    "productCode": "PRODUCT.CODE",
}


def _record(variant: str, fields: Dict[str, Any]) -> ParsedRecord:
    return ParsedRecord(
        message_type=f"{FORMAT_FAMILY}_{variant}",
        metadata=ParseMetadata(parser=FORMAT_FAMILY, format=variant),
        fields=fields,
    )


def _header_message_id(data: Dict[str, Any]):
    header = data.get("header")
    if isinstance(header, dict):
        return header.get("messageId")
    return None


class TemenosParser:
    """Extractor for Temenos core banking payloads."""

    SUPPORTED_FORMATS = ("JSON", "XML", "T24")

    def detect_format(self, message: str) -> str:
        """Classify a payload as one of this system's sub-formats."""
        stripped = message.strip()
        if stripped.startswith("<?xml") or stripped.startswith(f"<{XML_ROOT}>"):
            return "XML"

        data = try_json_object(message)
        if data is not None:
            message_id = _header_message_id(data)
            if isinstance(message_id, str) and message_id.startswith(MESSAGE_ID_PREFIX):
                return "JSON"

        if "TXN.REF=" in message and "AMOUNT=" in message:
            return "T24"

        return "UNKNOWN"

    def parse_json(self, json_message: str) -> ParsedRecord:
        operation = "Temenos JSON"
        with logged_extraction(logger, operation, json_message):
            require_text(json_message, operation, FORMAT_FAMILY)
            data = load_json_object(json_message, operation, FORMAT_FAMILY)

            if not _header_message_id(data):
                raise extraction_error(
                    MissingFieldError,
                    operation,
                    "missing header or messageId",
                    FORMAT_FAMILY,
                    field_name="header.messageId",
                )

            return _record("JSON", {key: data.get(key) for key in JSON_FIELDS})

    def parse_xml(self, xml_message: str) -> ParsedRecord:
        """
        Shallow element extraction from a <TemenosTransaction> document.

        Each field is read from the first child of that name; there is no
        schema or namespace handling.
        """
        operation = "Temenos XML"
        with logged_extraction(logger, operation, xml_message):
            require_text(xml_message, operation, FORMAT_FAMILY)
            try:
                root = ET.fromstring(xml_message.lstrip("\ufeff").strip())
            except ET.ParseError as e:
                raise extraction_error(InvalidFormatError, operation, f"malformed XML ({e})", FORMAT_FAMILY)

            if root.tag != XML_ROOT:
                raise extraction_error(
                    InvalidFormatError, operation, f"missing {XML_ROOT} element", FORMAT_FAMILY
                )

            def element_text(element: str) -> str:
                node = root.find(element)
                if node is None:
                    raise extraction_error(
                        MissingFieldError,
                        operation,
                        f"missing {element} element",
                        FORMAT_FAMILY,
                        field_name=element,
                    )
                return (node.text or "").strip()

            fields: Dict[str, Any] = {
                name: element_text(element) for name, element in XML_FIELDS.items()
            }
            fields["amount"] = to_float(element_text("Amount"), "Amount", operation, FORMAT_FAMILY)
            return _record("XML", fields)

    @staticmethod
    def split_t24(t24_message: str) -> Dict[str, str]:
        """Build a flat KEY -> value mapping, splitting each line on its first '='."""
        values: Dict[str, str] = {}
        for line in t24_message.splitlines():
            if "=" in line:
                key, _, value = line.partition("=")
                values[key.strip()] = value.strip()
        return values

    def parse_t24(self, t24_message: str) -> ParsedRecord:
        operation = "Temenos T24"
        with logged_extraction(logger, operation, t24_message):
            require_text(t24_message, operation, FORMAT_FAMILY)
            values = self.split_t24(t24_message)

            if not values.get("TXN.REF"):
                raise extraction_error(
                    MissingFieldError,
                    operation,
                    "missing TXN.REF",
                    FORMAT_FAMILY,
                    field_name="TXN.REF",
                )

            fields: Dict[str, Any] = {name: values.get(key) for name, key in T24_FIELDS.items()}
            amount = values.get("AMOUNT")
            fields["amount"] = (
                to_float(amount, "AMOUNT", operation, FORMAT_FAMILY) if amount is not None else None
            )
            return _record("T24", fields)
