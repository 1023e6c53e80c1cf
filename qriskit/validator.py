"""Structural validation and checksum verification for decoded QRIS codes."""
from __future__ import annotations

from .codec import checksum_input
from .config import settings
from .crc import crc16_ccitt
from .models import CategoryContent, QRISCode, QRISTag
from .tlv import MAX_CONTENT_LENGTH, Field, is_present

_CATEGORY_CONTENTS = {CategoryContent.STATIC.value, CategoryContent.DYNAMIC.value}


def _require(errors: list[str], field: Field | None, message: str) -> None:
    if not is_present(field):
        errors.append(message)


def _check_fee_pair(tree: QRISCode, errors: list[str]) -> None:
    has_category = is_present(tree.payment_fee_category)
    has_fee = is_present(tree.payment_fee)
    if has_fee and not has_category:
        errors.append("Payment fee category tag is missing")
    if has_category and not has_fee:
        errors.append("Payment fee tag is missing")


def check(tree: QRISCode, *, enforce_fee_pair: bool | None = None) -> list[str]:
    """Return every structural problem found in ``tree``, in a stable order."""

    if enforce_fee_pair is None:
        enforce_fee_pair = settings.enforce_fee_pair
    errors: list[str] = []

    _require(errors, tree.version, "Version tag is missing")
    _require(errors, tree.category, "Category tag is missing")
    if tree.category is None or tree.category.content not in _CATEGORY_CONTENTS:
        errors.append("Category content undefined")

    acquirer = tree.acquirer
    if not is_present(acquirer):
        errors.append("Acquirer tag is missing")
    else:
        _require(errors, acquirer.detail.site, "Acquirer site tag is missing")
        _require(errors, acquirer.detail.mpan, "Acquirer MPAN tag is missing")
        _require(errors, acquirer.detail.terminal_id, "Acquirer terminal id tag is missing")

        if acquirer.tag == QRISTag.ACQUIRER:
            _require(errors, acquirer.detail.category, "Acquirer category tag is missing")

            switching = tree.switching
            if not is_present(switching):
                errors.append("Switching tag is missing")
            else:
                _require(errors, switching.detail.site, "Switching site tag is missing")
                _require(errors, switching.detail.nmid, "Switching NMID tag is missing")
                _require(errors, switching.detail.category, "Switching category tag is missing")

    if enforce_fee_pair:
        _check_fee_pair(tree, errors)

    _require(errors, tree.merchant_category_code, "Merchant category tag is missing")
    _require(errors, tree.currency_code, "Currency code tag is missing")
    _require(errors, tree.country_code, "Country code tag is missing")
    _require(errors, tree.merchant_name, "Merchant name tag is missing")
    _require(errors, tree.merchant_city, "Merchant city tag is missing")
    _require(errors, tree.merchant_postal_code, "Merchant postal code tag is missing")
    if is_present(tree.additional_information) and len(tree.additional_information.content) > MAX_CONTENT_LENGTH:
        errors.append("Additional information content is too long")
    _require(errors, tree.crc_code, "CRC code tag is missing")

    return errors


def verify_checksum(tree: QRISCode, *, legacy_padding: bool | None = None) -> bool:
    """Check the stored CRC content against a freshly computed one."""

    if tree.crc_code is None:
        return False
    return tree.crc_code.content == crc16_ccitt(checksum_input(tree), legacy_padding=legacy_padding)
