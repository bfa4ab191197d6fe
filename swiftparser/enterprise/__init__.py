"""
Enterprise-gated capabilities and COBOL detection.
"""

from swiftparser.enterprise.capabilities import (
    ENTERPRISE_CONTACT,
    EnterpriseCapabilities,
    UnavailableCapabilities,
    enterprise_required,
)
from swiftparser.enterprise.cobol import detect_cobol, parse_cobol

__all__ = [
    "ENTERPRISE_CONTACT",
    "EnterpriseCapabilities",
    "UnavailableCapabilities",
    "enterprise_required",
    "detect_cobol",
    "parse_cobol",
]
