"""High level QRIS facade: resolve a source, regenerate, and render."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .codec import decode
from .models import PaymentFeeCategory, SourceType
from .renderer import render_qr_payload, render_terminal, save_qr_file
from .schemas import Overrides, QRISConfig
from .services.errors import err_source_empty
from .services.generator import regenerate

logger = logging.getLogger("qriskit.qris")


class QRIS:
    """Regenerate an existing QRIS code with new merchant, amount and fee values."""

    def __init__(self, config: QRISConfig | None = None, **options: Any):
        base = config.model_dump(exclude_none=True) if config else {}
        given = QRISConfig.model_validate(options).model_dump(exclude_unset=True) if options else {}
        self.config = QRISConfig.model_validate({**base, **given})

    def set_merchant_name(self, merchant_name: str) -> None:
        self.config.merchant_name = merchant_name

    def set_merchant_city(self, merchant_city: str) -> None:
        self.config.merchant_city = merchant_city

    def set_merchant_postal_code(self, merchant_postal_code: str) -> None:
        self.config.merchant_postal_code = merchant_postal_code

    def set_amount(self, amount: int | float) -> None:
        self.config.amount = amount

    def set_fee_category(self, fee_category: PaymentFeeCategory | str) -> None:
        self.config.fee_category = fee_category

    def set_fee(self, fee: int | float) -> None:
        self.config.fee = fee

    def set_terminal_label(self, terminal_label: str) -> None:
        self.config.terminal_label = terminal_label

    def _overrides(self) -> Overrides:
        return Overrides.model_validate(self.config.model_dump(include=set(Overrides.model_fields)))

    def _read_source(self) -> str:
        source = self.config.source_value
        if not source:
            raise err_source_empty(self.config.source_type.value)

        if self.config.source_type is SourceType.CODE:
            return source

        from .reader import looks_like_qris, read_from_base64, read_from_file

        if self.config.source_type is SourceType.IMAGE_PATH:
            scanned = read_from_file(source)
        else:
            scanned = read_from_base64(source)
        if not looks_like_qris(scanned):
            logger.warning("scanned code does not look like qris", extra={"source_type": self.config.source_type.value})
        return scanned

    def generate_qr(self) -> str:
        """Return the regenerated QRIS string."""

        raw = self._read_source()
        result = regenerate(decode(raw), self._overrides())
        logger.info(
            "qris generated",
            extra={"source_type": self.config.source_type.value, "length": len(result)},
        )
        return result

    def generate_qr_base64(self) -> str:
        """Return the regenerated code as a PNG data URL."""

        return render_qr_payload(self.generate_qr())["data_url"]

    def generate_qr_terminal(self) -> str:
        return render_terminal(self.generate_qr())

    def generate_qr_file(self, output: str | Path | None = None) -> Path:
        return save_qr_file(self.generate_qr(), output or "output.png")
