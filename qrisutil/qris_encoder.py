"""QRIS payload encoder: turns a static base payload into a dynamic one."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from .crc import crc16_ccitt
from .services.errors import err_bad_payload, err_invalid_format, err_value_too_long
from .tlv import TLVItem, TLVTree, parse_tree, serialize_tree

logger = logging.getLogger("qrisutil.encoder")

CRC_TAG = "63"
CRC_HEADER = "6304"
AMOUNT_TAG = "54"
ADDITIONAL_DATA_TAG = "62"

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class AdditionalData:
    invoice: str | None = None
    description: str | None = None

    def __bool__(self) -> bool:
        return bool(self.invoice or self.description)

    def to_subitems(self) -> Iterable[TLVItem]:
        if self.invoice:
            yield TLVItem(tag="01", value=self.invoice)
        if self.description:
            yield TLVItem(tag="07", value=self.description)


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str


def format_amount(amount: int | float | str | Decimal) -> str:
    """Render an amount with exactly two decimals, e.g. ``10000`` -> ``"10000.00"``.

    Floats are rounded from their exact binary value, so ``1.005`` gives
    ``"1.00"`` (its binary value sits just below 1.005).
    """

    try:
        value = Decimal(amount) if isinstance(amount, float) else Decimal(str(amount))
        if not value.is_finite():
            raise err_bad_payload(f"Invalid amount: {amount!r}")
        # Raises InvalidOperation once the result needs more digits than the context precision.
        return str(value.quantize(_CENTS, rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        raise err_bad_payload(f"Invalid amount: {amount!r}") from exc


def strip_crc(base_payload: str) -> str:
    """Cut the payload at the first CRC header, discarding any old checksum."""

    index = base_payload.find(CRC_HEADER)
    if index == -1:
        raise err_invalid_format(f'Invalid QRIS base: CRC tag "{CRC_HEADER}" not found')
    return base_payload[:index]


def attach_crc(payload_no_crc: str, encoding: str = "utf-8") -> EncodedPayload:
    """Append the CRC header and the checksum computed over it."""

    crc_input = f"{payload_no_crc}{CRC_HEADER}"
    crc = crc16_ccitt(crc_input, encoding=encoding)
    return EncodedPayload(payload=f"{crc_input}{crc}", crc=crc)


def generate_payload(
    base_payload: str,
    amount: int | float | str | Decimal,
    invoice: str | None = None,
    description: str | None = None,
    *,
    crc_encoding: str = "utf-8",
) -> EncodedPayload:
    """Set amount and additional data on a static payload and compute CRC16-CCITT.

    Tag 54 is always overwritten. Tag 62 is replaced wholesale when an invoice
    or description is given and left untouched otherwise.
    """

    tree: TLVTree = parse_tree(strip_crc(base_payload))
    tree[AMOUNT_TAG] = format_amount(amount)

    additional = AdditionalData(invoice=invoice, description=description)
    if additional:
        tree[ADDITIONAL_DATA_TAG] = {item.tag: item.value for item in additional.to_subitems()}

    try:
        payload_no_crc = serialize_tree(tree)
    except ValueError as exc:
        raise err_value_too_long(str(exc)) from exc

    encoded = attach_crc(payload_no_crc, encoding=crc_encoding)
    logger.debug("payload generated", extra={"crc": encoded.crc, "tags": sorted(tree)})
    return encoded


def generate(
    base_payload: str,
    amount: int | float | str | Decimal,
    invoice: str | None = None,
    description: str | None = None,
) -> str:
    """Return the dynamic QRIS string for ``base_payload`` and ``amount``."""

    return generate_payload(base_payload, amount, invoice, description).payload
