"""QRIS entity model: tag enums, composite fields and the top-level code."""
from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from typing import Iterator

from .tlv import Field, is_present, pad_length


class QRISTag(str, enum.Enum):
    VERSION = "00"
    CATEGORY = "01"
    ACQUIRER = "26"
    ACQUIRER_BANK_TRANSFER = "26"
    SWITCHING = "51"
    MERCHANT_CATEGORY_CODE = "52"
    CURRENCY_CODE = "53"
    PAYMENT_AMOUNT = "54"
    PAYMENT_FEE_CATEGORY = "55"
    PAYMENT_FEE_FIXED = "56"
    PAYMENT_FEE_PERCENT = "57"
    COUNTRY_CODE = "58"
    MERCHANT_NAME = "59"
    MERCHANT_CITY = "60"
    MERCHANT_POSTAL_CODE = "61"
    ADDITIONAL_INFORMATION = "62"
    CRC_CODE = "63"


class AcquirerDetailTag(str, enum.Enum):
    SITE = "00"
    MPAN = "01"
    TERMINAL_ID = "02"
    CATEGORY = "03"


class SwitchingDetailTag(str, enum.Enum):
    SITE = "00"
    NMID = "02"
    CATEGORY = "03"


class AdditionalInformationTag(str, enum.Enum):
    BILL_NUMBER = "01"
    MOBILE_NUMBER = "02"
    STORE_LABEL = "03"
    LOYALTY_NUMBER = "04"
    REFERENCE_LABEL = "05"
    CUSTOMER_LABEL = "06"
    TERMINAL_LABEL = "07"
    PURPOSE_OF_TRANSACTION = "08"
    ADDITIONAL_CONSUMER_DATA_REQUEST = "09"
    MERCHANT_TAX_ID = "10"
    MERCHANT_CHANNEL = "11"
    RFU_START = "12"
    RFU_END = "49"
    PAYMENT_SYSTEM_SPECIFIC_START = "50"
    PAYMENT_SYSTEM_SPECIFIC_END = "99"


class CategoryContent(str, enum.Enum):
    STATIC = "11"
    DYNAMIC = "12"


class PaymentFeeCategory(str, enum.Enum):
    FIXED = "FIXED"
    PERCENT = "PERCENT"


class PaymentFeeCategoryContent(str, enum.Enum):
    FIXED = "02"
    PERCENT = "03"


class SourceType(str, enum.Enum):
    CODE = "code"
    IMAGE_PATH = "image_path"
    BASE64 = "base64"


def _join_data(record: object) -> str:
    return "".join(item.data for item in _present(record))


def _present(record: object) -> Iterator[Field]:
    for slot in fields(record):  # type: ignore[arg-type]
        item = getattr(record, slot.name)
        if is_present(item):
            yield item


@dataclass(frozen=True)
class AcquirerDetail:
    site: Field | None = None
    mpan: Field | None = None
    terminal_id: Field | None = None
    category: Field | None = None

    def to_content(self) -> str:
        return _join_data(self)


@dataclass(frozen=True)
class SwitchingDetail:
    site: Field | None = None
    nmid: Field | None = None
    category: Field | None = None

    def to_content(self) -> str:
        return _join_data(self)


@dataclass(frozen=True)
class AdditionalInformationDetail:
    bill_number: Field | None = None
    mobile_number: Field | None = None
    store_label: Field | None = None
    loyalty_number: Field | None = None
    reference_label: Field | None = None
    customer_label: Field | None = None
    terminal_label: Field | None = None
    purpose_of_transaction: Field | None = None
    additional_consumer_data_request: Field | None = None
    merchant_tax_id: Field | None = None
    merchant_channel: Field | None = None
    rfu: Field | None = None
    payment_system_specific: Field | None = None

    def to_content(self) -> str:
        """Concatenate every present sub-field in canonical order."""

        return _join_data(self)


@dataclass(frozen=True)
class AcquirerField(Field):
    detail: AcquirerDetail = AcquirerDetail()


@dataclass(frozen=True)
class SwitchingField(Field):
    detail: SwitchingDetail = SwitchingDetail()


@dataclass(frozen=True)
class AdditionalInformationField(Field):
    detail: AdditionalInformationDetail = AdditionalInformationDetail()

    @classmethod
    def from_detail(cls, detail: AdditionalInformationDetail) -> "AdditionalInformationField":
        """Rebuild the composite so content, length and data match ``detail``."""

        content = detail.to_content()
        tag = QRISTag.ADDITIONAL_INFORMATION.value
        return cls(tag=tag, content=content, data=f"{tag}{pad_length(content)}{content}", detail=detail)


@dataclass(frozen=True)
class QRISCode:
    """Top-level QRIS code.

    Slot order is the canonical serialization order.
    """

    version: Field | None = None
    category: Field | None = None
    acquirer: AcquirerField | None = None
    acquirer_bank_transfer: AcquirerField | None = None
    switching: SwitchingField | None = None
    merchant_category_code: Field | None = None
    currency_code: Field | None = None
    payment_amount: Field | None = None
    payment_fee_category: Field | None = None
    payment_fee: Field | None = None
    country_code: Field | None = None
    merchant_name: Field | None = None
    merchant_city: Field | None = None
    merchant_postal_code: Field | None = None
    additional_information: AdditionalInformationField | None = None
    crc_code: Field | None = None

    def present_fields(self) -> Iterator[Field]:
        return _present(self)
