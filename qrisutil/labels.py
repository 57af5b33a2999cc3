"""Human readable names for QRIS tag ids."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

ROOT_TAG_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "00": "Payload Format Indicator",
        "01": "Point of Initiation Method",
        **{f"{tag:02d}": f"Merchant Account Info ({tag:02d})" for tag in range(26, 52)},
        "52": "Merchant Category Code",
        "53": "Transaction Currency",
        "54": "Transaction Amount",
        "55": "Tip or Convenience Indicator",
        "56": "Value of Convenience Fee Fixed",
        "57": "Value of Convenience Fee Percentage",
        "58": "Country Code",
        "59": "Merchant Name",
        "60": "Merchant City",
        "61": "Postal Code",
        "62": "Additional Data",
        "63": "CRC",
    }
)

ADDITIONAL_DATA_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "00": "Global Unique ID",
        "01": "Invoice Number",
        "07": "Description",
    }
)


@dataclass(frozen=True)
class TagLabels:
    """Label tables for top-level tags and tags nested inside container tags."""

    root: Mapping[str, str] = field(default_factory=lambda: ROOT_TAG_LABELS)
    nested: Mapping[str, str] = field(default_factory=lambda: ADDITIONAL_DATA_LABELS)

    def label(self, tag: str, nested: bool = False) -> str:
        table = self.nested if nested else self.root
        return table.get(tag, f"Tag {tag}")

    def merged(self, root: Mapping[str, str] | None = None, nested: Mapping[str, str] | None = None) -> TagLabels:
        return TagLabels(root={**self.root, **(root or {})}, nested={**self.nested, **(nested or {})})


DEFAULT_LABELS = TagLabels()
