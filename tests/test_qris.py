from __future__ import annotations

import logging

import pytest

from qriskit.codec import decode
from qriskit.models import PaymentFeeCategory, SourceType
from qriskit.qris import QRIS
from qriskit.schemas import QRISConfig
from qriskit.services.errors import EmptySource, FeeExceeded, ValidationFailed


class TestConstruction:
    def test_defaults(self):
        qris = QRIS()
        assert qris.config.source_type is SourceType.CODE
        assert qris.config.source_value is None

    def test_keyword_options(self, sample_qris):
        qris = QRIS(
            source_value=sample_qris,
            merchant_name="Test Merchant",
            merchant_address="Test Address",
            merchant_postal_code="12345",
            amount=1000,
            fee_category="fixed",
            fee=10,
            terminal_label="Test Terminal",
        )
        assert qris.config.merchant_city == "Test Address"
        assert qris.config.fee_category is PaymentFeeCategory.FIXED
        assert qris.config.terminal_label == "Test Terminal"

    def test_config_with_extra_options(self, sample_qris):
        qris = QRIS(QRISConfig(source_value=sample_qris, amount=500), amount=750)
        assert qris.config.source_value == sample_qris
        assert qris.config.amount == 750

    def test_aliased_option_overrides_config(self, sample_qris):
        qris = QRIS(QRISConfig(source_value=sample_qris, merchant_city="A"), merchant_address="B")
        assert qris.config.merchant_city == "B"
        assert qris.config.source_value == sample_qris


class TestSetters:
    def test_setters_update_config(self):
        qris = QRIS()
        qris.set_merchant_name("New Merchant")
        qris.set_merchant_city("New City")
        qris.set_merchant_postal_code("54321")
        qris.set_amount(2000)
        qris.set_fee_category("percent")
        qris.set_fee(20)
        qris.set_terminal_label("New Terminal")

        assert qris.config.merchant_name == "New Merchant"
        assert qris.config.merchant_city == "New City"
        assert qris.config.merchant_postal_code == "54321"
        assert qris.config.amount == 2000
        assert qris.config.fee_category is PaymentFeeCategory.PERCENT
        assert qris.config.fee == 20
        assert qris.config.terminal_label == "New Terminal"


class TestGenerate:
    def test_code_source_round_trip(self, sample_qris):
        assert QRIS(source_value=sample_qris).generate_qr() == sample_qris

    def test_empty_source(self):
        with pytest.raises(EmptySource):
            QRIS().generate_qr()

    def test_blank_source(self):
        with pytest.raises(EmptySource):
            QRIS(source_value="").generate_qr()

    def test_overrides_flow_through(self, sample_qris):
        qris = QRIS(source_value=sample_qris, amount=100, merchant_address="BANDUNG")
        tree = decode(qris.generate_qr())
        assert tree.payment_amount.content == "100"
        assert tree.merchant_city.content == "BANDUNG"

    def test_fee_exceeded_propagates(self, sample_qris):
        qris = QRIS(source_value=sample_qris, amount=100, fee_category="percent", fee=101)
        with pytest.raises(FeeExceeded):
            qris.generate_qr()

    def test_image_source_uses_reader(self, sample_qris, monkeypatch):
        pytest.importorskip("pyzbar.pyzbar")
        calls = []

        def fake_read(path):
            calls.append(path)
            return sample_qris

        monkeypatch.setattr("qriskit.reader.read_from_file", fake_read)
        qris = QRIS(source_type=SourceType.IMAGE_PATH, source_value="test.png")
        assert qris.generate_qr() == sample_qris
        assert calls == ["test.png"]

    def test_image_without_qris_shape_is_logged(self, sample_qris, monkeypatch, caplog):
        pytest.importorskip("pyzbar.pyzbar")
        monkeypatch.setattr("qriskit.reader.read_from_base64", lambda encoded: sample_qris[6:])
        qris = QRIS(source_type=SourceType.BASE64, source_value="aW1hZ2U=")

        with caplog.at_level(logging.WARNING, logger="qriskit.qris"):
            with pytest.raises(ValidationFailed) as excinfo:
                qris.generate_qr()

        assert excinfo.value.errors == ["Version tag is missing"]
        assert "scanned code does not look like qris" in caplog.text


class TestRenderOutputs:
    def test_base64_data_url(self, sample_qris):
        result = QRIS(source_value=sample_qris).generate_qr_base64()
        assert result.startswith("data:image/png;base64,")

    def test_terminal_output(self, sample_qris):
        assert QRIS(source_value=sample_qris).generate_qr_terminal().strip()

    def test_file_output(self, sample_qris, tmp_path):
        output = tmp_path / "nested" / "qris.png"
        path = QRIS(source_value=sample_qris).generate_qr_file(output)
        assert path == output
        assert output.read_bytes().startswith(b"\x89PNG")
