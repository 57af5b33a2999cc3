"""Generate, validate and extract QRIS (EMVCo TLV) payloads."""
from __future__ import annotations

from .qris_decoder import extract, extract_payload, validate, validate_payload
from .qris_encoder import EncodedPayload, generate, generate_payload
from .services.errors import ServiceError

__all__ = [
    "EncodedPayload",
    "ServiceError",
    "extract",
    "extract_payload",
    "generate",
    "generate_payload",
    "validate",
    "validate_payload",
]
