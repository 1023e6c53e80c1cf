from __future__ import annotations

import pytest

from qriskit.services.errors import (
    EmptySource,
    FeeExceeded,
    ParseError,
    ParseErrorKind,
    QRISError,
    QRReadError,
    ValidationFailed,
    err_fee_exceeded,
    err_length_mismatch,
    err_qr_read,
    err_source_empty,
    err_validation_failed,
)


class TestErrorTypes:
    def test_str_includes_code(self):
        error = QRISError(code="ERR_TEST", message="Test error message")
        assert str(error) == "ERR_TEST: Test error message"
        assert error.details is None

    @pytest.mark.parametrize("cls", [ParseError, FeeExceeded, ValidationFailed, EmptySource, QRReadError])
    def test_hierarchy(self, cls):
        assert issubclass(cls, QRISError)
        assert issubclass(cls, Exception)

    def test_parse_error_carries_location(self):
        error = err_length_mismatch("59", 10, 4, "5910DHKA", position=4)
        assert error.kind is ParseErrorKind.LENGTH_MISMATCH
        assert (error.tag, error.position, error.raw) == ("59", 4, "5910DHKA")

    def test_fee_exceeded_details(self):
        error = err_fee_exceeded(150)
        assert error.details == {"max_fee": 100, "actual_fee": 150}

    def test_validation_failed_keeps_list(self):
        error = err_validation_failed(["Version tag is missing", "CRC code tag is missing"])
        assert error.errors == ["Version tag is missing", "CRC code tag is missing"]
        assert "Version tag is missing" in error.message

    def test_source_empty(self):
        assert err_source_empty("code").details == {"source_type": "code"}

    def test_qr_read_default_message(self):
        assert err_qr_read().message == "Failed to read QR code"

    def test_catchable_as_base(self):
        with pytest.raises(QRISError) as excinfo:
            raise err_fee_exceeded(101)
        assert excinfo.value.code == "ERR_FEE_EXCEEDED"
