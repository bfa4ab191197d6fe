"""
Extractor registry and format-label routing.

The façade never branches on formats itself. A format label (detected or
supplied as a hint) is first resolved to a route key, then the registry
returns the extractor registered under that key. New formats are added by
registering an extractor, not by editing the façade.
"""

import re
import threading
from typing import Callable, Dict, List, Optional, Tuple

from swiftparser import formats
from swiftparser.core.exceptions import UnsupportedFormatError
from swiftparser.records import ParsedRecord

# An extractor receives the payload and the label it was routed by
Extractor = Callable[[str, str], ParsedRecord]

SWIFT_ROUTE = "SWIFT_MT"
SWIFT_LABEL_PATTERN = re.compile(r"^MT\d{3}$")

# (system keywords, ((variant keyword, label), ...), default label)
# Fiserv precedes FIS because "FISERV" contains "FIS".
KEYWORD_ROUTES: Tuple[Tuple[Tuple[str, ...], Tuple[Tuple[str, str], ...], str], ...] = (
    (("SWIFT",), (), SWIFT_ROUTE),
    (("ISO20022", "PACS.008"), (), formats.ISO20022),
    (("FISERV", "DNA"), (), formats.FISERV_DNA),
    (("BANCS",), (("JSON", formats.BANCS_JSON), ("XML", formats.BANCS_XML)), formats.BANCS_FLAT),
    (("FIS",), (("JSON", formats.FIS_JSON), ("DELIM", formats.FIS_DELIMITED)), formats.FIS_FIXED),
    (("TEMENOS",), (("JSON", formats.TEMENOS_JSON), ("XML", formats.TEMENOS_XML)), formats.TEMENOS_T24),
)


def resolve_route(label: str) -> str:
    """
    Map a format label to a registry key.

    Exact labels map to themselves and any MTnnn label maps to the SWIFT
    route. Anything else is matched case-insensitively by system keyword,
    then variant keyword. Unmatched labels come back upper-cased.
    """
    if not isinstance(label, str):
        raise UnsupportedFormatError(f"Unsupported format: {label!r}")

    upper = label.strip().upper()

    if upper in formats.SUPPORTED_FORMATS and not SWIFT_LABEL_PATTERN.match(upper):
        return upper
    if upper in formats.ENTERPRISE_FORMATS or upper in (formats.COBOL, formats.UNKNOWN):
        return upper
    if SWIFT_LABEL_PATTERN.match(upper):
        return SWIFT_ROUTE

    for system_keywords, variants, default in KEYWORD_ROUTES:
        if any(keyword in upper for keyword in system_keywords):
            for variant_keyword, variant_label in variants:
                if variant_keyword in upper:
                    return variant_label
            return default

    return upper


class ExtractorRegistry:
    """Thread-safe mapping from route key to extractor."""

    def __init__(self):
        self._extractors: Dict[str, Extractor] = {}
        self._lock = threading.Lock()

    def register(self, key: str, extractor: Extractor) -> None:
        with self._lock:
            self._extractors[key.upper()] = extractor

    def unregister(self, key: str) -> None:
        with self._lock:
            self._extractors.pop(key.upper(), None)

    def get(self, key: str) -> Optional[Extractor]:
        with self._lock:
            return self._extractors.get(key.upper())

    def lookup(self, label: str) -> Tuple[str, Optional[Extractor]]:
        """Resolve a label and return (route key, extractor or None)."""
        route = resolve_route(label)
        return route, self.get(route)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._extractors)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._extractors)
