"""QRIS payload decoder and encoder."""
from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Mapping, TypeVar

from .models import (
    AcquirerDetail,
    AcquirerDetailTag,
    AcquirerField,
    AdditionalInformationDetail,
    AdditionalInformationField,
    AdditionalInformationTag,
    QRISCode,
    QRISTag,
    SwitchingDetail,
    SwitchingDetailTag,
    SwitchingField,
)
from .services.errors import ParseError
from .tlv import HEADER_SIZE, Field, iter_fields, sanitize

CRC_LENGTH_SENTINEL = "04"

logger = logging.getLogger("qriskit.codec")

DetailT = TypeVar("DetailT")

TOP_LEVEL_SLOTS: Mapping[str, str] = MappingProxyType(
    {
        QRISTag.VERSION.value: "version",
        QRISTag.CATEGORY.value: "category",
        QRISTag.ACQUIRER.value: "acquirer",
        QRISTag.SWITCHING.value: "switching",
        QRISTag.MERCHANT_CATEGORY_CODE.value: "merchant_category_code",
        QRISTag.CURRENCY_CODE.value: "currency_code",
        QRISTag.PAYMENT_AMOUNT.value: "payment_amount",
        QRISTag.PAYMENT_FEE_CATEGORY.value: "payment_fee_category",
        QRISTag.PAYMENT_FEE_FIXED.value: "payment_fee",
        QRISTag.PAYMENT_FEE_PERCENT.value: "payment_fee",
        QRISTag.COUNTRY_CODE.value: "country_code",
        QRISTag.MERCHANT_NAME.value: "merchant_name",
        QRISTag.MERCHANT_CITY.value: "merchant_city",
        QRISTag.MERCHANT_POSTAL_CODE.value: "merchant_postal_code",
        QRISTag.ADDITIONAL_INFORMATION.value: "additional_information",
        QRISTag.CRC_CODE.value: "crc_code",
    }
)

ACQUIRER_SLOTS: Mapping[str, str] = MappingProxyType({tag.value: tag.name.lower() for tag in AcquirerDetailTag})

SWITCHING_SLOTS: Mapping[str, str] = MappingProxyType({tag.value: tag.name.lower() for tag in SwitchingDetailTag})

ADDITIONAL_INFORMATION_SLOTS: Mapping[str, str] = MappingProxyType(
    {
        tag.value: tag.name.lower()
        for tag in AdditionalInformationTag
        if not tag.name.endswith(("_START", "_END"))
    }
)

_RFU_RANGE = range(int(AdditionalInformationTag.RFU_START.value), int(AdditionalInformationTag.RFU_END.value) + 1)
_PAYMENT_SYSTEM_RANGE = range(
    int(AdditionalInformationTag.PAYMENT_SYSTEM_SPECIFIC_START.value),
    int(AdditionalInformationTag.PAYMENT_SYSTEM_SPECIFIC_END.value) + 1,
)


def _additional_information_slot(tag: str) -> str | None:
    slot = ADDITIONAL_INFORMATION_SLOTS.get(tag)
    if slot is not None or not (tag.isascii() and tag.isdigit()):
        return slot
    number = int(tag)
    if number in _RFU_RANGE:
        return "rfu"
    if number in _PAYMENT_SYSTEM_RANGE:
        return "payment_system_specific"
    return None


def _decode_detail(
    content: str,
    offset: int,
    slot_for: Callable[[str], str | None],
    detail_cls: Callable[..., DetailT],
    scope: str,
) -> DetailT:
    values: dict[str, Field] = {}
    for position, item in iter_fields(content, offset=offset):
        slot = slot_for(item.tag)
        if slot is None:
            logger.debug("unknown tag skipped", extra={"tag": item.tag, "position": position, "scope": scope})
            continue
        values[slot] = item
    return detail_cls(**values)


def decode_acquirer_detail(content: str, *, offset: int = 0) -> AcquirerDetail:
    return _decode_detail(content, offset, ACQUIRER_SLOTS.get, AcquirerDetail, "acquirer")


def decode_switching_detail(content: str, *, offset: int = 0) -> SwitchingDetail:
    return _decode_detail(content, offset, SWITCHING_SLOTS.get, SwitchingDetail, "switching")


def decode_additional_information_detail(content: str, *, offset: int = 0) -> AdditionalInformationDetail:
    return _decode_detail(
        content,
        offset,
        _additional_information_slot,
        AdditionalInformationDetail,
        "additional_information",
    )


def _composite(slot: str, item: Field, position: int) -> Field:
    inner = position + HEADER_SIZE
    if slot == "acquirer":
        detail = decode_acquirer_detail(item.content, offset=inner)
        return AcquirerField(tag=item.tag, content=item.content, data=item.data, detail=detail)
    if slot == "switching":
        detail = decode_switching_detail(item.content, offset=inner)
        return SwitchingField(tag=item.tag, content=item.content, data=item.data, detail=detail)
    if slot == "additional_information":
        detail = decode_additional_information_detail(item.content, offset=inner)
        return AdditionalInformationField(tag=item.tag, content=item.content, data=item.data, detail=detail)
    return item


def decode(raw: str) -> QRISCode:
    """Parse a QRIS string into a :class:`QRISCode` tree.

    Unknown tags are consumed and dropped, so they never reappear on encode.
    """

    payload = sanitize(raw)
    values: dict[str, Field] = {}
    try:
        for position, item in iter_fields(payload):
            slot = TOP_LEVEL_SLOTS.get(item.tag)
            if slot is None:
                logger.debug("unknown tag skipped", extra={"tag": item.tag, "position": position, "scope": "root"})
                continue
            values[slot] = _composite(slot, item, position)
    except ParseError as exc:
        logger.warning(
            "qris parse failed",
            extra={
                "kind": exc.kind.value if exc.kind else None,
                "tag": exc.tag,
                "position": exc.position,
                "raw": exc.raw,
            },
        )
        raise
    return QRISCode(**values)


def encode(tree: QRISCode) -> str:
    """Serialize every present field in canonical order."""

    return "".join(item.data for item in tree.present_fields())


def canonical_payload(tree: QRISCode) -> str:
    """Serialize the tree without its CRC field."""

    return encode(replace(tree, crc_code=None))


def checksum_input(tree: QRISCode) -> str:
    return f"{canonical_payload(tree)}{QRISTag.CRC_CODE.value}{CRC_LENGTH_SENTINEL}"
