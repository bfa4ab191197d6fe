"""
Payload format detection.
"""

from swiftparser.detection.detector import (
    DETECTION_RULES,
    DetectionRule,
    FormatDetector,
    Payload,
    detect_format,
)

__all__ = [
    "DETECTION_RULES",
    "DetectionRule",
    "FormatDetector",
    "Payload",
    "detect_format",
]
