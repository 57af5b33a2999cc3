"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

logger = logging.getLogger("qrisutil.tlv")

TAG_SIZE = 2
LENGTH_SIZE = 2
HEADER_SIZE = TAG_SIZE + LENGTH_SIZE
MAX_VALUE_LENGTH = 99

# Values are either raw strings or nested trees for container tags.
TLVTree = dict[str, Any]


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        if len(self.tag) != TAG_SIZE:
            raise ValueError(f"Tag id must be {TAG_SIZE} characters, got {self.tag!r}")
        if len(self.value) > MAX_VALUE_LENGTH:
            raise ValueError(f"Tag {self.tag} value length {len(self.value)} exceeds {MAX_VALUE_LENGTH} characters")
        length = f"{len(self.value):02d}"
        return f"{self.tag}{length}{self.value}"


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string."""

    return "".join(item.serialize() for item in items)


def parse_tlv(payload: str, strict: bool = True) -> Iterator[TLVItem]:
    """Parse TLV payload string into TLV items.

    In strict mode a malformed header, a length running past the payload, or
    dangling trailing data raises ``ValueError``. Otherwise parsing stops at
    the first such entry and the items read so far stand.
    """

    idx = 0
    total = len(payload)
    while idx + HEADER_SIZE <= total:
        tag = payload[idx : idx + TAG_SIZE]
        length_field = payload[idx + TAG_SIZE : idx + HEADER_SIZE]
        if not (length_field.isascii() and length_field.isdigit()):
            if strict:
                raise ValueError(f"Invalid TLV length field {length_field!r} at offset {idx}")
            logger.debug("tlv parse stopped", extra={"offset": idx, "reason": "bad_length"})
            return
        value_start = idx + HEADER_SIZE
        value_end = value_start + int(length_field)
        if value_end > total:
            if strict:
                raise ValueError("Invalid TLV length exceeds payload")
            logger.debug("tlv parse stopped", extra={"offset": idx, "reason": "overrun"})
            return
        yield TLVItem(tag=tag, value=payload[value_start:value_end])
        idx = value_end
    if idx != total:
        if strict:
            raise ValueError("Dangling TLV data detected")
        logger.debug("tlv parse stopped", extra={"offset": idx, "reason": "dangling"})


def parse_tree(payload: str, container_tags: Iterable[str] = (), strict: bool = False) -> TLVTree:
    """Parse a payload into a tag -> value mapping.

    Values of tags listed in ``container_tags`` are parsed recursively with the
    same container set. A repeated tag at one level keeps the last value.
    """

    containers = frozenset(container_tags)
    tree: TLVTree = {}
    for item in parse_tlv(payload, strict=strict):
        if item.tag in containers:
            tree[item.tag] = parse_tree(item.value, containers, strict=strict)
        else:
            tree[item.tag] = item.value
    return tree


def serialize_tree(tree: TLVTree) -> str:
    """Serialize a TLV tree with tag ids in ascending order."""

    items = []
    for tag in sorted(tree):
        value = tree[tag]
        if isinstance(value, dict):
            value = serialize_tree(value)
        items.append(TLVItem(tag=tag, value=value))
    return build_tlv(items)
