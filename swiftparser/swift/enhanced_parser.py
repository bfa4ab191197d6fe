"""
Enhanced SWIFT MT Parser

Extends the base parser to the wider MT family used for securities (MT515),
trade finance (MT700), proprietary envelopes (MT798), statements (MT950)
and transfer requests (MT101).
"""

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Tuple

from swiftparser.records import ParsedRecord
from swiftparser.swift import field_parsers
from swiftparser.swift.base_parser import SwiftField, SwiftMTParser
from swiftparser.swift.field_tables import (
    ENHANCED_REQUIRED_FIELDS,
    ENHANCED_SUPPORTED_TYPES,
    ENHANCED_SWIFT_FIELDS,
)


class EnhancedSwiftMTParser(SwiftMTParser):
    """SWIFT MT parser covering MT103, MT202, MT515, MT700, MT798, MT950 and MT101."""

    field_tables: Mapping[str, Mapping[str, str]] = ENHANCED_SWIFT_FIELDS
    required_tables: Mapping[str, Tuple[str, ...]] = ENHANCED_REQUIRED_FIELDS
    supported_message_types: Tuple[str, ...] = ENHANCED_SUPPORTED_TYPES

    def create_standardized_fields(
        self, fields: Mapping[str, SwiftField], message_type: str
    ) -> Dict[str, Any]:
        if message_type in ("MT103", "MT202"):
            result = super().create_standardized_fields(fields, message_type)
        else:
            builder = getattr(self, f"_build_{message_type.lower()}")
            result = {
                "status": "parsed",
                "originalFields": {tag: f.to_dict() for tag, f in fields.items()},
            }
            result.update(builder(fields))

        result["fields"] = {f.name: f.content for f in fields.values()}
        return result

    def _build_mt515(self, fields: Mapping[str, SwiftField]) -> Dict[str, Any]:
        reference = self._content(fields, "20C")
        return {
            "transactionReference": reference,
            "reference": reference,
            "function": self._content(fields, "23G"),
            "securityIdentification": self._content(fields, "35B"),
            "quantity": self._content(fields, "36B"),
            "tradeDate": self._content(fields, "69A"),
            "settlementDate": self._content(fields, "69B"),
            "dealingPrice": self._content(fields, "90A"),
            "settlementAmount": self._content(fields, "19A"),
        }

    def _build_mt700(self, fields: Mapping[str, SwiftField]) -> Dict[str, Any]:
        credit_number = self._content(fields, "20")
        result: Dict[str, Any] = {
            "transactionReference": credit_number,
            "documentaryCreditNumber": credit_number,
            "dateOfIssue": self._content(fields, "31C"),
            "expiry": self._content(fields, "31D"),
            "applicant": self.parse_customer_info(self._content(fields, "50")),
            "beneficiary": self.parse_customer_info(self._content(fields, "59")),
            "descriptionOfGoods": self._content(fields, "45A"),
            "documentsRequired": self._content(fields, "46A"),
        }
        if "32B" in fields:
            result.update(field_parsers.parse_currency_amount(fields["32B"].content, "32B"))
        return result

    def _build_mt798(self, fields: Mapping[str, SwiftField]) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "transactionReference": self._content(fields, "20"),
            "relatedReference": self._content(fields, "21"),
            "subMessageType": self._content(fields, "12"),
            "proprietaryMessage": self._content(fields, "77A"),
            "envelopeContents": self._content(fields, "77E"),
            "sender": self.parse_customer_info(self._content(fields, "50K")),
            "receiver": self.parse_customer_info(self._content(fields, "59")),
        }
        if "32A" in fields:
            result.update(self.parse_amount_field(fields["32A"].content))
        return result

    def _build_mt950(self, fields: Mapping[str, SwiftField]) -> Dict[str, Any]:
        return {
            "transactionReference": self._content(fields, "20"),
            "accountIdentification": self._content(fields, "25"),
            "statementNumber": self._content(fields, "28C"),
            "openingBalance": self._balance(fields, "60F"),
            "closingBalance": self._balance(fields, "62F"),
            "closingAvailableBalance": self._content(fields, "64"),
            "informationToAccountOwner": self._content(fields, "86"),
        }

    def _build_mt101(self, fields: Mapping[str, SwiftField]) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "transactionReference": self._content(fields, "20"),
            "instructionCode": self._content(fields, "23"),
            "instructingParty": self._content(fields, "50A"),
            "receiver": self.parse_customer_info(self._content(fields, "59")),
            "remittanceInfo": self._content(fields, "70"),
            "detailsOfCharges": self._content(fields, "71A"),
        }
        if "32A" in fields:
            result.update(self.parse_amount_field(fields["32A"].content))
        return result

    @staticmethod
    def _balance(fields: Mapping[str, SwiftField], tag: str) -> Optional[Dict[str, Any]]:
        if tag not in fields:
            return None
        return field_parsers.parse_balance(fields[tag].content, tag)

    def parse(self, raw_message: Any, assumed_type: Optional[str] = None) -> ParsedRecord:
        record = super().parse(raw_message, assumed_type)
        if record.message_type != "MT950":
            return record

        # Statements repeat :61: once per entry
        message = raw_message.replace("\r\n", "\n").replace("\r", "\n")
        lines = [content for tag, content in self.iter_fields(message) if tag == "61"]
        return replace(record, fields={**record.fields, "statementLines": lines})
