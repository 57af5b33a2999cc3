"""Shared service error definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


def err_invalid_format(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_INVALID_FORMAT", message=message or "Invalid QRIS payload format", status_code=422)


def err_value_too_long(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_VALUE_TOO_LONG", message=message or "TLV value exceeds 99 characters", status_code=422)


def err_bad_payload(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_BAD_PAYLOAD", message=message or "Invalid request payload", status_code=400)


def err_malformed_tlv(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_MALFORMED_TLV", message=message or "Malformed TLV data", status_code=422)
