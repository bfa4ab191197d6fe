"""
Parsed record envelope and its JSON interchange form.

Every extractor returns a ParsedRecord. Envelope keys (messageType,
timestamp, parseMetadata) are stored as attributes; everything else the
extractor produced lives in ``fields``. Read access is mapping-style over
both, so ``record["transactionReference"]`` and ``record["messageType"]``
work alike.
"""

import json
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from swiftparser.core.exceptions import InvalidFormatError

ENVELOPE_KEYS = ("messageType", "timestamp", "parseMetadata")
FAILURE_KEYS = ("error", "originalMessage")


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def new_parse_id() -> str:
    return str(uuid.uuid4())


def freeze(value: Any) -> Any:
    """Read-only copy of a nested structure: mappings become proxies, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Plain dict/list copy of a frozen structure."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class ParseMetadata:
    """Correlation and timing data attached to every record."""

    parser: str
    format: str
    parse_id: str = field(default_factory=new_parse_id)
    parse_time_ms: Optional[int] = None
    timestamp: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "parseId": self.parse_id,
            "parser": self.parser,
            "format": self.format,
        }
        if self.parse_time_ms is not None:
            result["parseTime"] = self.parse_time_ms
        if self.timestamp is not None:
            result["timestamp"] = self.timestamp
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParseMetadata":
        return cls(
            parser=data.get("parser", ""),
            format=data.get("format", ""),
            parse_id=data.get("parseId") or new_parse_id(),
            parse_time_ms=data.get("parseTime"),
            timestamp=data.get("timestamp"),
        )


@dataclass(frozen=True)
class ParsedRecord(Mapping):
    """Immutable result of one successful parse."""

    message_type: str
    metadata: ParseMetadata
    fields: Mapping[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=utc_timestamp)

    def __post_init__(self):
        object.__setattr__(self, "fields", freeze(self.fields))

    # Mapping protocol over the flattened record
    def __getitem__(self, key: str) -> Any:
        if key == "messageType":
            return self.message_type
        if key == "timestamp":
            return self.timestamp
        if key == "parseMetadata":
            return self.metadata.to_dict()
        # Nested values come back as fresh copies of the frozen storage
        return thaw(self.fields[key])

    def __iter__(self) -> Iterator[str]:
        yield "messageType"
        yield from self.fields
        yield "timestamp"
        yield "parseMetadata"

    def __len__(self) -> int:
        return len(self.fields) + len(ENVELOPE_KEYS)

    def __hash__(self) -> int:
        return hash((self.message_type, self.metadata.parse_id))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def with_timing(self, parse_time_ms: int, timestamp: str) -> "ParsedRecord":
        """Copy of this record with façade timing stamped into its metadata."""
        metadata = replace(self.metadata, parse_time_ms=parse_time_ms, timestamp=timestamp)
        return replace(self, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"messageType": self.message_type}
        result.update(thaw(self.fields))
        result["timestamp"] = self.timestamp
        result["parseMetadata"] = self.metadata.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParsedRecord":
        if "messageType" not in data:
            raise InvalidFormatError("Serialized record is missing messageType")
        fields = {k: v for k, v in data.items() if k not in ENVELOPE_KEYS}
        return cls(
            message_type=data["messageType"],
            metadata=ParseMetadata.from_dict(data.get("parseMetadata") or {}),
            fields=fields,
            timestamp=data.get("timestamp") or utc_timestamp(),
        )


@dataclass(frozen=True)
class ParseFailure(Mapping):
    """Batch slot for a payload that failed to parse, readable as {error, originalMessage}."""

    error: str
    original_message: Any

    def __getitem__(self, key: str) -> Any:
        if key == "error":
            return self.error
        if key == "originalMessage":
            return self.original_message
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(FAILURE_KEYS)

    def __len__(self) -> int:
        return len(FAILURE_KEYS)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "originalMessage": self.original_message}


BatchResult = Union[ParsedRecord, ParseFailure]


def serialize(record: Union[ParsedRecord, ParseFailure], indent: Optional[int] = None) -> str:
    """Render a record (or failure slot) as JSON text."""
    return json.dumps(record.to_dict(), indent=indent, ensure_ascii=False)


def deserialize(text: str) -> ParsedRecord:
    """Rebuild a ParsedRecord from its JSON interchange form."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidFormatError(f"Serialized record is not valid JSON: {e}")
    if not isinstance(data, dict):
        raise InvalidFormatError("Serialized record must be a JSON object")
    return ParsedRecord.from_dict(data)
