"""QRIS regeneration service: field overrides, fee rules and checksum refresh."""
from __future__ import annotations

import enum
import logging
from dataclasses import replace

from ..codec import checksum_input, encode
from ..crc import crc16_ccitt
from ..models import (
    AdditionalInformationDetail,
    AdditionalInformationField,
    AdditionalInformationTag,
    CategoryContent,
    PaymentFeeCategory,
    PaymentFeeCategoryContent,
    QRISCode,
    QRISTag,
)
from ..schemas import Overrides
from ..tlv import Field, is_present, with_content
from ..validator import check
from .errors import MAX_PERCENT_FEE, err_fee_exceeded, err_validation_failed

logger = logging.getLogger("qriskit.generator")

_FEE_TAGS = {
    PaymentFeeCategory.FIXED: (PaymentFeeCategoryContent.FIXED, QRISTag.PAYMENT_FEE_FIXED),
    PaymentFeeCategory.PERCENT: (PaymentFeeCategoryContent.PERCENT, QRISTag.PAYMENT_FEE_PERCENT),
}


def format_number(value: int | float) -> str:
    """Render a number without a trailing ``.0`` for integral values."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _set(current: Field | None, tag: enum.Enum, content: str) -> Field:
    base = current if is_present(current) else Field.of(tag.value, "")
    return with_content(base, content)


def _apply_amount(tree: QRISCode, overrides: Overrides) -> QRISCode:
    if overrides.amount:
        return replace(tree, payment_amount=_set(None, QRISTag.PAYMENT_AMOUNT, format_number(overrides.amount)))
    return replace(tree, payment_amount=None)


def _apply_merchant(tree: QRISCode, overrides: Overrides) -> QRISCode:
    if tree.acquirer is None or tree.acquirer.tag != QRISTag.ACQUIRER:
        return tree
    changes: dict[str, Field] = {}
    if overrides.merchant_name:
        changes["merchant_name"] = _set(tree.merchant_name, QRISTag.MERCHANT_NAME, overrides.merchant_name)
    if overrides.merchant_city:
        changes["merchant_city"] = _set(tree.merchant_city, QRISTag.MERCHANT_CITY, overrides.merchant_city)
    if overrides.merchant_postal_code:
        changes["merchant_postal_code"] = _set(
            tree.merchant_postal_code, QRISTag.MERCHANT_POSTAL_CODE, overrides.merchant_postal_code
        )
    return replace(tree, **changes) if changes else tree


def _apply_fee(tree: QRISCode, overrides: Overrides) -> QRISCode:
    if not (overrides.amount and overrides.fee_category and overrides.fee):
        return tree

    category = _set(None, QRISTag.CATEGORY, CategoryContent.DYNAMIC.value)
    if overrides.fee_category is PaymentFeeCategory.PERCENT and overrides.fee > MAX_PERCENT_FEE:
        raise err_fee_exceeded(overrides.fee)

    category_content, fee_tag = _FEE_TAGS[overrides.fee_category]
    return replace(
        tree,
        category=category,
        payment_fee_category=_set(None, QRISTag.PAYMENT_FEE_CATEGORY, category_content.value),
        payment_fee=_set(None, fee_tag, format_number(overrides.fee)),
    )


def _apply_terminal_label(tree: QRISCode, overrides: Overrides) -> QRISCode:
    if not overrides.terminal_label:
        return tree
    current = tree.additional_information
    detail = current.detail if current is not None else AdditionalInformationDetail()
    label = _set(None, AdditionalInformationTag.TERMINAL_LABEL, overrides.terminal_label)
    return replace(tree, additional_information=AdditionalInformationField.from_detail(replace(detail, terminal_label=label)))


def _refresh_additional_information(tree: QRISCode) -> QRISCode:
    if tree.additional_information is None:
        return tree
    return replace(tree, additional_information=AdditionalInformationField.from_detail(tree.additional_information.detail))


def refresh_checksum(tree: QRISCode, *, legacy_padding: bool | None = None) -> QRISCode:
    """Recompute tag 63 over every other present field."""

    crc = crc16_ccitt(checksum_input(tree), legacy_padding=legacy_padding)
    return replace(tree, crc_code=_set(tree.crc_code, QRISTag.CRC_CODE, crc))


def apply_overrides(tree: QRISCode, overrides: Overrides, *, legacy_padding: bool | None = None) -> QRISCode:
    """Run every mutation step and return the updated tree, without validating it."""

    tree = _apply_amount(tree, overrides)
    tree = _apply_merchant(tree, overrides)
    tree = _apply_fee(tree, overrides)
    tree = _apply_terminal_label(tree, overrides)
    tree = _refresh_additional_information(tree)
    return refresh_checksum(tree, legacy_padding=legacy_padding)


def regenerate(
    tree: QRISCode,
    overrides: Overrides | None = None,
    *,
    enforce_fee_pair: bool | None = None,
    legacy_padding: bool | None = None,
) -> str:
    """Apply ``overrides`` to ``tree`` and return the serialized QRIS string.

    Raises :class:`FeeExceeded` for a percent fee above 100 and
    :class:`ValidationFailed` when the regenerated tree is incomplete.
    """

    if overrides is None:
        overrides = Overrides()
    updated = apply_overrides(tree, overrides, legacy_padding=legacy_padding)

    errors = check(updated, enforce_fee_pair=enforce_fee_pair)
    if errors:
        logger.warning("qris validation failed", extra={"errors": errors})
        raise err_validation_failed(errors)

    logger.debug(
        "qris regenerated",
        extra={
            "dynamic": updated.category is not None and updated.category.content == CategoryContent.DYNAMIC.value,
            "crc": updated.crc_code.content if updated.crc_code else None,
        },
    )
    return encode(updated)
