"""Shared error definitions for decoding, regeneration and image I/O."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

MAX_PERCENT_FEE = 100


class ParseErrorKind(str, enum.Enum):
    TOO_SHORT = "TOO_SHORT"
    INVALID_LENGTH = "INVALID_LENGTH"
    LENGTH_MISMATCH = "LENGTH_MISMATCH"


@dataclass(slots=True)
class QRISError(Exception):
    code: str
    message: str
    details: Any = None

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


@dataclass(slots=True)
class ParseError(QRISError):
    kind: ParseErrorKind | None = None
    tag: str | None = None
    position: int | None = None
    raw: str | None = None


@dataclass(slots=True)
class FeeExceeded(QRISError):
    pass


@dataclass(slots=True)
class ValidationFailed(QRISError):
    errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class EmptySource(QRISError):
    pass


@dataclass(slots=True)
class QRReadError(QRISError):
    pass


def err_too_short(raw: str, *, position: int = 0) -> ParseError:
    return ParseError(
        code="ERR_PARSE",
        message="QRIS code is too short",
        kind=ParseErrorKind.TOO_SHORT,
        position=position,
        raw=raw,
    )


def err_invalid_length(tag: str, length_code: str, *, position: int) -> ParseError:
    return ParseError(
        code="ERR_PARSE",
        message=f"Format data length is invalid for tag {tag}",
        kind=ParseErrorKind.INVALID_LENGTH,
        tag=tag,
        position=position,
        raw=length_code,
    )


def err_length_mismatch(tag: str, required: int, available: int, raw: str, *, position: int) -> ParseError:
    return ParseError(
        code="ERR_PARSE",
        message=f"Data length does not match for tag {tag}. Required: {required}, Available: {available}",
        kind=ParseErrorKind.LENGTH_MISMATCH,
        tag=tag,
        position=position,
        raw=raw,
    )


def err_fee_exceeded(actual_fee: int | float) -> FeeExceeded:
    return FeeExceeded(
        code="ERR_FEE_EXCEEDED",
        message=f"fee may not exceed {MAX_PERCENT_FEE}%",
        details={"max_fee": MAX_PERCENT_FEE, "actual_fee": actual_fee},
    )


def err_validation_failed(errors: list[str]) -> ValidationFailed:
    return ValidationFailed(
        code="ERR_VALIDATION_FAILED",
        message="Validation failed: " + "; ".join(errors),
        details=list(errors),
        errors=list(errors),
    )


def err_source_empty(source_type: str | None = None) -> EmptySource:
    return EmptySource(
        code="ERR_SOURCE_EMPTY",
        message="Source value is empty",
        details={"source_type": source_type},
    )


def err_qr_read(message: str | None = None, *, source: str | None = None) -> QRReadError:
    return QRReadError(
        code="ERR_QR_READ",
        message=message or "Failed to read QR code",
        details={"source": source} if source else None,
    )
