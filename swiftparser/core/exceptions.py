"""
swiftparser - Custom Exceptions

This module defines the exception hierarchy raised by detectors, extractors
and the parsing façade.
"""

from typing import Any, Dict, Optional


class SwiftParserException(Exception):
    """Base exception for all swiftparser errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "SWIFTPARSER_ERROR"
        self.context = context or {}

    @property
    def format_family(self) -> Optional[str]:
        return self.context.get("format_family")

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (Code: {self.error_code}, Context: {self.context})"
        return f"{self.message} (Code: {self.error_code})"


def _family_context(format_family: Optional[str], **extra: Any) -> Dict[str, Any]:
    context = {k: v for k, v in extra.items() if v is not None}
    if format_family:
        context["format_family"] = format_family
    return context


class ConfigurationException(SwiftParserException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context={"config_key": config_key} if config_key else {},
        )


class InvalidInputError(SwiftParserException):
    """Payload is None, not a string, or blank."""

    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_INPUT")


class InvalidFormatError(SwiftParserException):
    """Payload lacks the structural envelope the extractor requires."""

    def __init__(self, message: str, format_family: Optional[str] = None):
        super().__init__(
            message,
            error_code="INVALID_FORMAT",
            context=_family_context(format_family),
        )


# Alias kept for callers that think in terms of structure rather than format.
StructuralMismatchError = InvalidFormatError


class UnsupportedTypeError(SwiftParserException):
    """Structurally valid message whose sub-type is not supported."""

    def __init__(
        self,
        message: str,
        message_type: Optional[str] = None,
        format_family: Optional[str] = None,
    ):
        super().__init__(
            message,
            error_code="UNSUPPORTED_TYPE",
            context=_family_context(format_family, message_type=message_type),
        )


class MissingFieldError(SwiftParserException):
    """Required field absent after an otherwise successful parse."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        message_type: Optional[str] = None,
        format_family: Optional[str] = None,
    ):
        super().__init__(
            message,
            error_code="MISSING_FIELD",
            context=_family_context(
                format_family, field=field_name, message_type=message_type
            ),
        )


class MalformedValueError(SwiftParserException):
    """Field content does not match its expected micro-format."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        value: Optional[str] = None,
        format_family: Optional[str] = None,
        error_code: str = "MALFORMED_VALUE",
    ):
        super().__init__(
            message,
            error_code=error_code,
            context=_family_context(format_family, field=field_name, value=value),
        )


class InvalidAmountFormatError(MalformedValueError):
    """Field 32A content is not YYMMDD + currency + amount."""

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(
            message,
            field_name="32A",
            value=value,
            format_family="SWIFT",
            error_code="INVALID_AMOUNT_FORMAT",
        )


class FormatMismatchError(SwiftParserException):
    """Caller-asserted format contradicts the detected one."""

    def __init__(self, message: str, expected: str, detected: str):
        super().__init__(
            message,
            error_code="FORMAT_MISMATCH",
            context={"expected": expected, "detected": detected},
        )


class UnsupportedFormatError(SwiftParserException):
    """No extractor is registered for the resolved format label."""

    def __init__(self, message: str, format_label: Optional[str] = None):
        super().__init__(
            message,
            error_code="UNSUPPORTED_FORMAT",
            context={"format": format_label} if format_label else {},
        )


class EnterpriseRequiredError(SwiftParserException):
    """A capability that is not available in this build was requested."""

    def __init__(self, message: str, capability: str):
        super().__init__(
            message,
            error_code="ENTERPRISE_REQUIRED",
            context={"capability": capability},
        )
