"""
Helpers shared by the per-format extractors: input guards, JSON loading,
numeric coercion and failure logging.
"""

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Type

from swiftparser.core.exceptions import (
    InvalidFormatError,
    InvalidInputError,
    MalformedValueError,
    SwiftParserException,
)
from swiftparser.core.structured_logging import LogCategory

PREVIEW_LENGTH = 100


def preview(payload: Any, length: int = PREVIEW_LENGTH) -> Optional[str]:
    if isinstance(payload, str):
        return payload[:length]
    return None


def extraction_error(
    error_cls: Type[SwiftParserException],
    operation: str,
    detail: str,
    format_family: str,
    **kwargs: Any,
) -> SwiftParserException:
    """Build an extractor error whose message names the failing operation."""
    return error_cls(f"{operation} parsing failed: {detail}", format_family=format_family, **kwargs)


def require_text(payload: Any, operation: str, format_family: str) -> str:
    if not isinstance(payload, str) or not payload.strip():
        raise InvalidInputError(f"{operation} parsing failed: message must be a non-empty string")
    return payload


def require_min_length(payload: Any, min_length: int, operation: str, format_family: str) -> str:
    """Positional records are length-checked before anything else, blank ones included."""
    if isinstance(payload, str) and len(payload) < min_length:
        raise extraction_error(
            InvalidFormatError,
            operation,
            f"message too short ({len(payload)} < {min_length} characters)",
            format_family,
        )
    return require_text(payload, operation, format_family)


def load_json_object(payload: str, operation: str, format_family: str) -> Dict[str, Any]:
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise extraction_error(InvalidFormatError, operation, f"malformed JSON ({e.msg})", format_family)
    if not isinstance(data, dict):
        raise extraction_error(InvalidFormatError, operation, "JSON payload must be an object", format_family)
    return data


def try_json_object(payload: str) -> Optional[Dict[str, Any]]:
    """Parse payload as a JSON object, or return None if it is anything else."""
    try:
        data = json.loads(payload)
    except (TypeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def to_float(value: Any, field_name: str, operation: str, format_family: str) -> float:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        raise extraction_error(
            MalformedValueError,
            operation,
            f"{field_name} is not numeric: {value!r}",
            format_family,
            field_name=field_name,
            value=None if value is None else str(value),
        )


@contextmanager
def logged_extraction(
    log: logging.Logger, operation: str, payload: Any, preview_length: int = PREVIEW_LENGTH
) -> Iterator[None]:
    """Log extractor failures with a payload preview, then re-raise."""
    try:
        yield
    except SwiftParserException as e:
        log.error(
            f"{operation} parsing failed",
            extra={
                "category": LogCategory.PARSING,
                "metadata": {
                    "error": e.message,
                    "error_code": e.error_code,
                    "format_family": e.format_family,
                    "message_preview": preview(payload, preview_length),
                },
            },
        )
        raise
