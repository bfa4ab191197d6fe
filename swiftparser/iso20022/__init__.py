"""
ISO 20022 XML message support (pacs.008 extraction).
"""

from swiftparser.iso20022.pacs008 import ISO20022Parser, ISO20022_MESSAGES

__all__ = ["ISO20022Parser", "ISO20022_MESSAGES"]
