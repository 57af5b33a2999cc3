"""Pydantic schemas for API contracts."""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    base_payload: str = Field(min_length=8, description="Static QRIS payload containing the 6304 CRC tag")
    amount: Decimal = Field(ge=0, allow_inf_nan=False)
    invoice: str | None = Field(default=None, max_length=99)
    description: str | None = Field(default=None, max_length=99)


class GenerateResponse(BaseModel):
    payload: str
    crc: str


class PayloadRequest(BaseModel):
    payload: str = Field(description="Full QRIS payload including CRC")


class ValidateResponse(BaseModel):
    valid: bool


class ExtractResponse(BaseModel):
    valid: bool
    fields: dict[str, Any]
