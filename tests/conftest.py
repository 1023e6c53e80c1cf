from __future__ import annotations

import pytest

from qriskit.models import (
    AcquirerDetail,
    AcquirerField,
    QRISCode,
    QRISTag,
    SwitchingDetail,
    SwitchingField,
)
from qriskit.tlv import Field

SAMPLE_QRIS = (
    "00020101021126740025ID.CO.BANKNEOCOMMERCE.WWW011893600490594025501202120005900565650303UMI"
    "51550025ID.CO.BANKNEOCOMMERCE.WWW0215ID10232469816180303UMI5204541153033605802ID"
    "5910DHKA STORE6013BANDUNG BARAT6105403916233052230016985445676624117760703T0163042900"
)


def composite(cls, tag: str, detail):
    content = detail.to_content()
    return cls(tag=tag, content=content, data=f"{tag}{len(content):02d}{content}", detail=detail)


@pytest.fixture
def sample_qris() -> str:
    return SAMPLE_QRIS


@pytest.fixture
def minimal_tree() -> QRISCode:
    acquirer = composite(
        AcquirerField,
        QRISTag.ACQUIRER.value,
        AcquirerDetail(
            site=Field.of("00", "ID.CO.EXAMPLE.WWW"),
            mpan=Field.of("01", "936000000000000001"),
            terminal_id=Field.of("02", "000000000001"),
            category=Field.of("03", "UMI"),
        ),
    )
    switching = composite(
        SwitchingField,
        QRISTag.SWITCHING.value,
        SwitchingDetail(
            site=Field.of("00", "ID.CO.QRIS.WWW"),
            nmid=Field.of("02", "ID1000000000001"),
            category=Field.of("03", "UMI"),
        ),
    )
    return QRISCode(
        version=Field.of("00", "01"),
        category=Field.of("01", "11"),
        acquirer=acquirer,
        switching=switching,
        merchant_category_code=Field.of("52", "5499"),
        currency_code=Field.of("53", "360"),
        country_code=Field.of("58", "ID"),
        merchant_name=Field.of("59", "Merchant"),
        merchant_city=Field.of("60", "City"),
        merchant_postal_code=Field.of("61", "12345"),
        crc_code=Field.of("63", "1234"),
    )
