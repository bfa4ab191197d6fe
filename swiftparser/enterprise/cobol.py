"""
COBOL copybook detection.

Recognises COBOL source or copybook text so the façade can hand it to the
enterprise COBOL capability instead of reporting an unknown format.
"""

import re
from typing import Any, Optional

from swiftparser.enterprise.capabilities import EnterpriseCapabilities, UnavailableCapabilities

COBOL_INDICATORS = (
    re.compile(r"^\s*\d{6}\s+", re.MULTILINE),  # sequence-number column
    re.compile(r"IDENTIFICATION\s+DIVISION", re.IGNORECASE),
    re.compile(r"DATA\s+DIVISION", re.IGNORECASE),
    re.compile(r"PROCEDURE\s+DIVISION", re.IGNORECASE),
    re.compile(r"\bPIC(?:TURE)?\s+[SX9]"),
    re.compile(r"\bCOPY\s+[A-Z0-9-]+"),
)


def detect_cobol(data: Any) -> bool:
    """True when any COBOL structural marker appears in the text."""
    if not isinstance(data, str) or not data:
        return False
    return any(pattern.search(data) for pattern in COBOL_INDICATORS)


def parse_cobol(data: Any, capabilities: Optional[EnterpriseCapabilities] = None) -> Any:
    """
    Hand COBOL data to the enterprise capability.

    Returns None when the data is not COBOL; otherwise the capability's
    result, which in this build is always an EnterpriseRequiredError.
    """
    if not detect_cobol(data):
        return None
    return (capabilities or UnavailableCapabilities()).parse_cobol(data)
