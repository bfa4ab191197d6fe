"""
SWIFT MT Message Support

- MT103: Single Customer Credit Transfer
- MT202: General Financial Institution Transfer
- MT515, MT700, MT798, MT950, MT101 via the enhanced parser

Supports block extraction, field-tag tables, required field validation and
sub-field parsing (32A amounts, customer blocks, BIC codes).
"""

from swiftparser.swift.field_tables import (
    SWIFT_FIELDS,
    ENHANCED_SWIFT_FIELDS,
    REQUIRED_FIELDS,
    ENHANCED_REQUIRED_FIELDS,
)
from swiftparser.swift.field_parsers import (
    parse_amount,
    parse_amount_field,
    parse_currency_amount,
    parse_balance,
    parse_customer_info,
    validate_bic,
)
from swiftparser.swift.base_parser import (
    SwiftField,
    SwiftMTParser,
    parse_swift_message,
)
from swiftparser.swift.enhanced_parser import EnhancedSwiftMTParser

__all__ = [
    "SWIFT_FIELDS",
    "ENHANCED_SWIFT_FIELDS",
    "REQUIRED_FIELDS",
    "ENHANCED_REQUIRED_FIELDS",
    "parse_amount",
    "parse_amount_field",
    "parse_currency_amount",
    "parse_balance",
    "parse_customer_info",
    "validate_bic",
    "SwiftField",
    "SwiftMTParser",
    "parse_swift_message",
    "EnhancedSwiftMTParser",
]
