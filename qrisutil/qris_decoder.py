"""QRIS payload checks: CRC validation and readable tag extraction."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from .crc import crc16_ccitt
from .labels import DEFAULT_LABELS, TagLabels
from .qris_encoder import ADDITIONAL_DATA_TAG, CRC_HEADER, CRC_TAG
from .tlv import TLVTree, parse_tree

logger = logging.getLogger("qrisutil.decoder")

DEFAULT_CONTAINER_TAGS = frozenset({ADDITIONAL_DATA_TAG})


def validate_payload(payload: str, encoding: str = "utf-8") -> bool:
    """Check the 4 characters after the first ``6304`` against a fresh CRC."""

    index = payload.find(CRC_HEADER)
    if index == -1 or len(payload) < index + len(CRC_HEADER) + 4:
        return False
    crc_input = payload[: index + len(CRC_HEADER)]
    expected = payload[index + len(CRC_HEADER) : index + len(CRC_HEADER) + 4]
    try:
        calculated = crc16_ccitt(crc_input, encoding=encoding)
    except UnicodeEncodeError:
        logger.debug("payload not encodable", extra={"encoding": encoding})
        return False
    if expected != calculated:
        logger.debug("crc mismatch", extra={"expected": expected, "calculated": calculated})
        return False
    return True


def _relabel(tree: TLVTree, labels: TagLabels, nested: bool) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for tag, value in tree.items():
        if isinstance(value, dict):
            value = _relabel(value, labels, nested=True)
        result[labels.label(tag, nested=nested)] = value
    return result


def extract_payload(
    payload: str,
    labels: TagLabels = DEFAULT_LABELS,
    container_tags: Iterable[str] = DEFAULT_CONTAINER_TAGS,
    strict: bool = False,
) -> dict[str, Any]:
    """Parse a payload and key its values by readable label, without the CRC tag."""

    tree = parse_tree(payload, container_tags, strict=strict)
    tree.pop(CRC_TAG, None)
    return _relabel(tree, labels, nested=False)


def validate(payload: str) -> bool:
    return validate_payload(payload)


def extract(payload: str) -> dict[str, Any]:
    return extract_payload(payload)
