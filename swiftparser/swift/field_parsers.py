"""
Parsers for the structured SWIFT MT field formats: value date / currency /
amount (32A), currency / amount (32B), statement balances (60F, 62F),
customer blocks (50K, 59) and BIC codes.
"""

import re
from datetime import date
from typing import Any, Dict, Optional

from swiftparser.core.exceptions import InvalidAmountFormatError, MalformedValueError

AMOUNT_32A_PATTERN = re.compile(r"^(\d{6})([A-Z]{3})([\d,.]+)$")
AMOUNT_32B_PATTERN = re.compile(r"^([A-Z]{3})([\d,.]+)$")
BALANCE_PATTERN = re.compile(r"^([DC])(\d{6})([A-Z]{3})([\d,.]+)$")
BIC_PATTERN = re.compile(r"^[A-Z]{4}[A-Z]{2}[0-9A-Z]{2}([0-9A-Z]{3})?$")

# A trailing comma followed by one or two digits is a decimal comma
DECIMAL_COMMA = re.compile(r",(\d{1,2})$")


def parse_amount(amount_str: str) -> float:
    """
    Convert a SWIFT amount string to a float.

    "1000,00" uses the SWIFT decimal comma and gives 1000.0; "1,000.50" and
    "100000" use commas as thousands separators (or none) and give 1000.5
    and 100000.0.
    """
    if "." not in amount_str and DECIMAL_COMMA.search(amount_str):
        head, _, tail = amount_str.rpartition(",")
        normalized = f"{head.replace(',', '')}.{tail}"
    else:
        normalized = amount_str.replace(",", "")
    return float(normalized)


def parse_swift_date(yymmdd: str) -> str:
    """YYMMDD -> YYYY-MM-DD, with the year taken as 2000 + YY."""
    year = 2000 + int(yymmdd[0:2])
    month = int(yymmdd[2:4])
    day = int(yymmdd[4:6])
    return date(year, month, day).isoformat()


def parse_amount_field(content: str) -> Dict[str, Any]:
    """
    Parse field 32A (Value Date/Currency/Amount).

    Format: YYMMDDCCCAMOUNT (e.g., 230701USD1000,00)

    Returns:
        Dict with valueDate (YYYY-MM-DD), currency and amount keys
    """
    match = AMOUNT_32A_PATTERN.match(content or "")
    if not match:
        raise InvalidAmountFormatError(f"Invalid amount field format: {content}", value=content)

    date_str, currency, amount_str = match.groups()
    try:
        return {
            "valueDate": parse_swift_date(date_str),
            "currency": currency,
            "amount": parse_amount(amount_str),
        }
    except ValueError:
        raise InvalidAmountFormatError(f"Invalid amount field format: {content}", value=content)


def parse_currency_amount(content: str, tag: str = "32B") -> Dict[str, Any]:
    """Parse a currency + amount field such as 32B (e.g., EUR150000,)."""
    match = AMOUNT_32B_PATTERN.match(content or "")
    if match:
        currency, amount_str = match.groups()
        try:
            return {"currency": currency, "amount": parse_amount(amount_str)}
        except ValueError:
            pass
    raise MalformedValueError(
        f"Invalid currency amount field {tag}: {content}",
        field_name=tag,
        value=content,
        format_family="SWIFT",
    )


def parse_balance(content: str, tag: str) -> Dict[str, Any]:
    """Parse a statement balance (60F/62F): D/C mark, date, currency, amount."""
    match = BALANCE_PATTERN.match(content or "")
    if match:
        mark, date_str, currency, amount_str = match.groups()
        try:
            return {
                "mark": "DEBIT" if mark == "D" else "CREDIT",
                "date": parse_swift_date(date_str),
                "currency": currency,
                "amount": parse_amount(amount_str),
            }
        except ValueError:
            pass
    raise MalformedValueError(
        f"Invalid balance field {tag}: {content}",
        field_name=tag,
        value=content,
        format_family="SWIFT",
    )


def parse_customer_info(content: Optional[str]) -> Optional[Dict[str, Optional[str]]]:
    """
    Split a customer block into account, name and address.

    Line 1 is the account, line 2 the name, and any further lines are
    joined with ", " as the address.
    """
    if not content:
        return None

    lines = [line.strip() for line in content.split("\n")]

    return {
        "account": lines[0] or None,
        "name": (lines[1] if len(lines) > 1 else "") or None,
        "address": ", ".join(lines[2:]) or None,
        "raw": content,
    }


def validate_bic(bic: Any) -> bool:
    """
    Validate BIC (Bank Identifier Code) format.

    4 letters (institution) + 2 letters (country) + 2 alphanumeric
    (location) + optional 3 alphanumeric (branch). Case-insensitive.
    """
    if not bic or not isinstance(bic, str):
        return False

    upper_bic = bic.upper()
    if len(upper_bic) not in (8, 11):
        return False

    return BIC_PATTERN.match(upper_bic) is not None
