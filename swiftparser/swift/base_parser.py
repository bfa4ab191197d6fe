"""
SWIFT MT Message Parser

Parses MT103 (Single Customer Credit Transfer) and MT202 (General Financial
Institution Transfer) messages from raw block text into ParsedRecords.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from swiftparser.core.exceptions import (
    FormatMismatchError,
    InvalidFormatError,
    InvalidInputError,
    MissingFieldError,
    UnsupportedTypeError,
)
from swiftparser.core.structured_logging import LogCategory
from swiftparser.extraction import logged_extraction
from swiftparser.records import ParsedRecord, ParseMetadata
from swiftparser.swift import field_parsers
from swiftparser.swift.field_tables import (
    BASE_SUPPORTED_TYPES,
    REQUIRED_FIELDS,
    SWIFT_FIELDS,
)

logger = logging.getLogger(__name__)

FORMAT_FAMILY = "SWIFT"


@dataclass(frozen=True)
class SwiftField:
    """A recognised tag from the text block."""

    tag: str
    name: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"tag": self.tag, "name": self.name, "content": self.content}


class SwiftMTParser:
    """
    Parser for SWIFT MT messages.

    Handles:
    - Message type extraction from the application header (block 2)
    - Field extraction from the text block (block 4)
    - Required field validation per message type
    - Amount, customer and BIC sub-field parsing
    """

    PARSER_NAME = "SWIFT"

    # {2:I103...} for input messages, {2:O103...} for output messages
    HEADER_PATTERN = re.compile(r"\{2:[IO](\d{3})")

    # Block 4 runs to the first closing brace
    TEXT_BLOCK_PATTERN = re.compile(r"\{4:(.*?)\}", re.DOTALL)

    # :TAG:value, each value running up to the next tag line or end of block
    FIELD_PATTERN = re.compile(
        r"(?:^|\n):(\d{2}[A-Z]?):(.*?)(?=\n:\d{2}[A-Z]?:|\Z)", re.DOTALL
    )

    # Single-line text blocks have no line starts to anchor on
    INLINE_FIELD_PATTERN = re.compile(
        r":(\d{2}[A-Z]?):(.*?)(?=:\d{2}[A-Z]?:|\Z)", re.DOTALL
    )

    field_tables: Mapping[str, Mapping[str, str]] = SWIFT_FIELDS
    required_tables: Mapping[str, Tuple[str, ...]] = REQUIRED_FIELDS
    supported_message_types: Tuple[str, ...] = BASE_SUPPORTED_TYPES

    def __init__(self, strict: bool = True):
        """
        Initialize parser.

        Args:
            strict: If True, a message type hint that disagrees with the
                application header raises FormatMismatchError. Otherwise
                the header wins and the hint is ignored.
        """
        self.strict = strict
        logger.debug(
            f"{type(self).__name__} initialized",
            extra={"metadata": {"supported_types": list(self.supported_message_types)}},
        )

    def parse(self, raw_message: Any, assumed_type: Optional[str] = None) -> ParsedRecord:
        """
        Parse a SWIFT message from raw text.

        Args:
            raw_message: Raw SWIFT message text
            assumed_type: Optional message type hint such as "MT103"

        Returns:
            ParsedRecord whose messageType is the header type

        Raises:
            InvalidInputError: message is not a non-empty string
            InvalidFormatError: header or text block missing
            UnsupportedTypeError: type outside the supported set
            MissingFieldError: a required tag is absent
        """
        with logged_extraction(logger, "SWIFT message", raw_message):
            if not raw_message or not isinstance(raw_message, str):
                raise InvalidInputError(
                    "Invalid message format: message must be a non-empty string"
                )

            message = raw_message.replace("\r\n", "\n").replace("\r", "\n")

            if "{1:" not in message:
                raise InvalidFormatError(
                    "Invalid SWIFT message format: missing basic header",
                    format_family=FORMAT_FAMILY,
                )

            message_type = self.extract_message_type(message)
            self._check_assumed_type(assumed_type, message_type)

            if message_type not in self.supported_message_types:
                raise UnsupportedTypeError(
                    f"Unsupported message type: {message_type}",
                    message_type=message_type,
                    format_family=FORMAT_FAMILY,
                )

            fields = self.parse_fields(message, message_type)
            self.validate_required_fields(fields, message_type)

            record = ParsedRecord(
                message_type=message_type,
                metadata=ParseMetadata(parser=self.PARSER_NAME, format=message_type),
                fields=self.create_standardized_fields(fields, message_type),
            )

        logger.debug(
            "Message parsed successfully",
            extra={
                "category": LogCategory.PARSING,
                "metadata": {
                    "message_type": message_type,
                    "transaction_reference": record.get("transactionReference"),
                    "amount": record.get("amount"),
                    "currency": record.get("currency"),
                },
            },
        )
        return record

    def _check_assumed_type(self, assumed_type: Optional[str], message_type: str) -> None:
        if not assumed_type or assumed_type.upper() == message_type:
            return
        if self.strict:
            raise FormatMismatchError(
                f"Format mismatch: expected {assumed_type.upper()} but header declares {message_type}",
                expected=assumed_type.upper(),
                detected=message_type,
            )
        logger.warning(
            f"Ignoring type hint {assumed_type}; header declares {message_type}"
        )

    def extract_message_type(self, message: str) -> str:
        """Extract the message type (e.g. 'MT103') from the application header."""
        header_match = self.HEADER_PATTERN.search(message)

        if not header_match:
            raise InvalidFormatError(
                "Invalid SWIFT message format: missing application header",
                format_family=FORMAT_FAMILY,
            )

        return f"MT{header_match.group(1)}"

    def _text_block(self, message: str) -> str:
        text_block_match = self.TEXT_BLOCK_PATTERN.search(message)

        if not text_block_match:
            raise InvalidFormatError(
                "Invalid SWIFT message format: missing text block",
                format_family=FORMAT_FAMILY,
            )

        # Drop the "-" block terminator
        content = text_block_match.group(1).rstrip()
        if content.endswith("-"):
            content = content[:-1].rstrip()
        return content

    def iter_fields(self, message: str) -> Iterator[Tuple[str, str]]:
        """Yield (tag, content) for every tag in the text block, in order."""
        block = self._text_block(message)
        pattern = self.FIELD_PATTERN if "\n" in block else self.INLINE_FIELD_PATTERN
        for match in pattern.finditer(block):
            yield match.group(1), match.group(2).strip()

    def parse_fields(self, message: str, message_type: str) -> Dict[str, SwiftField]:
        """
        Parse the text block into recognised fields.

        Tags absent from the message type's table are dropped. A repeated
        tag keeps its last occurrence.
        """
        field_definitions = self.field_tables.get(message_type, {})
        raw_fields = list(self.iter_fields(message))

        if not raw_fields:
            raise InvalidFormatError(
                "No valid fields found in message", format_family=FORMAT_FAMILY
            )

        fields: Dict[str, SwiftField] = {}
        for tag, content in raw_fields:
            if tag in field_definitions:
                fields[tag] = SwiftField(tag=tag, name=field_definitions[tag], content=content)

        return fields

    def required_fields(self, message_type: str) -> List[str]:
        """Required tags for a message type; empty for unknown types."""
        return list(self.required_tables.get(message_type, ()))

    def validate_required_fields(self, fields: Mapping[str, Any], message_type: str) -> None:
        for required_field in self.required_fields(message_type):
            if required_field not in fields:
                raise MissingFieldError(
                    f"Missing required field: {required_field} for {message_type}",
                    field_name=required_field,
                    message_type=message_type,
                    format_family=FORMAT_FAMILY,
                )

    @staticmethod
    def _content(fields: Mapping[str, SwiftField], tag: str) -> Optional[str]:
        swift_field = fields.get(tag)
        return swift_field.content if swift_field else None

    def create_standardized_fields(
        self, fields: Mapping[str, SwiftField], message_type: str
    ) -> Dict[str, Any]:
        """Assemble the semantic record body for MT103 / MT202."""
        def content(tag: str) -> Optional[str]:
            return self._content(fields, tag)

        result: Dict[str, Any] = {
            "transactionReference": content("20"),
            "status": "parsed",
            "originalFields": {tag: f.to_dict() for tag, f in fields.items()},
        }

        if "32A" in fields:
            result.update(self.parse_amount_field(fields["32A"].content))

        if message_type == "MT103":
            result["sender"] = self.parse_customer_info(content("50K"))
            result["receiver"] = self.parse_customer_info(content("59"))
            result["orderingInstitution"] = content("52A")
            result["beneficiaryInstitution"] = content("57A")
            result["remittanceInfo"] = content("70")
            result["detailsOfCharges"] = content("71A")
        elif message_type == "MT202":
            result["relatedReference"] = content("21")
            result["orderingInstitution"] = content("52A")
            result["beneficiaryInstitution"] = content("58A")
            result["senderToReceiverInfo"] = content("72")

        return result

    # Sub-field parsers exposed on the parser for convenience
    parse_amount_field = staticmethod(field_parsers.parse_amount_field)
    parse_customer_info = staticmethod(field_parsers.parse_customer_info)
    validate_bic = staticmethod(field_parsers.validate_bic)

    def supported_types(self) -> List[str]:
        """Return a copy of the supported message types."""
        return list(self.supported_message_types)

    @staticmethod
    def to_json(record: ParsedRecord) -> str:
        return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)


def parse_swift_message(raw_message: str, strict: bool = True) -> ParsedRecord:
    """
    Convenience function to parse an MT103 or MT202 message.

    Args:
        raw_message: Raw SWIFT message text
        strict: If True, reject type hints that disagree with the header

    Returns:
        Parsed record
    """
    return SwiftMTParser(strict=strict).parse(raw_message)
