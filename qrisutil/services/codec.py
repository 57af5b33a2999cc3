"""QRIS generate / validate / extract bound to codec configuration."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..config import CodecConfig
from ..labels import DEFAULT_LABELS, TagLabels
from ..monitoring import record_operation
from ..qris_decoder import extract_payload, validate_payload
from ..qris_encoder import EncodedPayload, generate_payload
from .errors import ServiceError, err_malformed_tlv

logger = logging.getLogger("qrisutil.codec")


@dataclass(slots=True)
class ExtractResult:
    valid: bool
    fields: dict[str, Any]


class QrisCodec:
    def __init__(self, config: CodecConfig | None = None, labels: TagLabels | None = None):
        self.config = config or CodecConfig()
        base_labels = labels or DEFAULT_LABELS
        self.labels = base_labels.merged(root=self.config.tag_labels, nested=self.config.subtag_labels)
        self.container_tags = frozenset(self.config.container_tags)

    def generate(
        self,
        base_payload: str,
        amount: int | float | str | Decimal,
        invoice: str | None = None,
        description: str | None = None,
    ) -> EncodedPayload:
        try:
            encoded = generate_payload(
                base_payload,
                amount,
                invoice,
                description,
                crc_encoding=self.config.crc_encoding,
            )
        except ServiceError as exc:
            record_operation("generate", exc.code)
            raise
        record_operation("generate", "ok")
        return encoded

    def validate(self, payload: str) -> bool:
        valid = validate_payload(payload, encoding=self.config.crc_encoding)
        record_operation("validate", "valid" if valid else "invalid")
        return valid

    def extract(self, payload: str) -> ExtractResult:
        try:
            fields = extract_payload(
                payload,
                labels=self.labels,
                container_tags=self.container_tags,
                strict=self.config.strict_parsing,
            )
        except ValueError as exc:
            record_operation("extract", "malformed")
            logger.info("strict extract rejected payload", extra={"reason": str(exc)})
            raise err_malformed_tlv(str(exc)) from exc
        valid = validate_payload(payload, encoding=self.config.crc_encoding)
        record_operation("extract", "ok")
        return ExtractResult(valid=valid, fields=fields)
