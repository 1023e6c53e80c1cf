"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from .services.errors import err_invalid_length, err_length_mismatch, err_too_short

HEADER_SIZE = 4
MAX_CONTENT_LENGTH = 99

logger = logging.getLogger("qriskit.tlv")


def pad_length(content: str) -> str:
    return f"{len(content):02d}"


@dataclass(frozen=True)
class Field:
    tag: str
    content: str
    data: str

    @classmethod
    def of(cls, tag: str, content: str) -> "Field":
        return cls(tag=tag, content=content, data=f"{tag}{pad_length(content)}{content}")

    @classmethod
    def empty(cls) -> "Field":
        return cls(tag="", content="", data="")

    @property
    def is_present(self) -> bool:
        return bool(self.tag)


def is_present(field: Field | None) -> bool:
    return field is not None and field.is_present


def sanitize(raw: str) -> str:
    """Drop line breaks and surrounding whitespace from a scanned payload."""

    return raw.replace("\n", "").replace("\r", "").strip()


def decode_one(payload: str, *, offset: int = 0) -> Field:
    """Decode the TLV record at the head of ``payload``.

    ``offset`` is the absolute position of ``payload`` inside the scanned
    string and is only used to report error positions.
    """

    total = len(payload)
    if total < HEADER_SIZE or (total == HEADER_SIZE and payload[2:4] != "00"):
        raise err_too_short(payload, position=offset)

    tag = payload[:2]
    length_code = payload[2:4]
    if not (length_code.isascii() and length_code.isdigit()):
        raise err_invalid_length(tag, length_code, position=offset + 2)

    length = int(length_code)
    if total < HEADER_SIZE + length:
        raise err_length_mismatch(tag, length, total - HEADER_SIZE, payload, position=offset + HEADER_SIZE)

    content = payload[HEADER_SIZE : HEADER_SIZE + length]
    return Field(tag=tag, content=content, data=payload[: HEADER_SIZE + length])


def iter_fields(payload: str, *, offset: int = 0) -> Iterator[tuple[int, Field]]:
    """Yield ``(position, field)`` for every record until the payload is consumed."""

    idx = 0
    total = len(payload)
    while idx < total:
        item = decode_one(payload[idx:], offset=offset + idx)
        yield offset + idx, item
        idx += len(item.data)


def with_content(field: Field, content: str) -> Field:
    """Return ``field`` carrying ``content``, or a blank field when it is empty."""

    if not content:
        return Field.empty()
    if len(content) > MAX_CONTENT_LENGTH:
        logger.warning(
            "content exceeds two-digit length",
            extra={"tag": field.tag, "content_length": len(content)},
        )
    return Field.of(field.tag, content)
