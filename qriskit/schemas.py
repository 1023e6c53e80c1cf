"""Pydantic schemas for regeneration overrides and facade configuration."""
from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .models import PaymentFeeCategory, SourceType

MAX_FIELD_LENGTH = 99


class Overrides(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    merchant_name: str | None = Field(default=None, max_length=MAX_FIELD_LENGTH)
    merchant_city: str | None = Field(
        default=None,
        max_length=MAX_FIELD_LENGTH,
        validation_alias=AliasChoices("merchant_city", "merchant_address"),
    )
    merchant_postal_code: str | None = Field(default=None, max_length=MAX_FIELD_LENGTH)
    amount: int | float | None = Field(default=None, ge=0)
    fee_category: PaymentFeeCategory | None = None
    fee: int | float | None = Field(default=None, ge=0)
    terminal_label: str | None = Field(default=None, max_length=MAX_FIELD_LENGTH)

    @field_validator("fee_category", mode="before")
    @classmethod
    def _normalize_fee_category(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper() or None
        return value


class QRISConfig(Overrides):
    """Source plus overrides, as accepted by :class:`qriskit.qris.QRIS`."""

    source_type: SourceType = SourceType.CODE
    source_value: str | None = None
