#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Amount parsing and Danish number formatting.

Amounts are written with a dot as thousands separator and a comma as decimal
separator: 1.234,56.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional, Union

Number = Union[Decimal, int, float]

_TO_DANISH = str.maketrans({',': '.', '.': ','})


def _to_decimal(value) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, int):
            result = Decimal(value)
        elif isinstance(value, float):
            result = Decimal(repr(value))
        else:
            return None
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def _to_cents(amount: Decimal) -> Decimal:
    # context widened so any finite amount keeps all its integer digits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        ctx.Emax = max(ctx.Emax, amount.adjusted())
        return amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def parse_amount(value: Union[str, Number, None]) -> Optional[Decimal]:
    """
    Convert an amount to Decimal.

    Text is read in the Danish convention: every '.' is a thousands separator
    and ',' is the decimal separator, so "10.000,00" and "10000" both give
    Decimal('10000'). Numbers are taken as they are.

    Returns:
        The amount, or None if it is not a finite number.
    """
    if isinstance(value, str):
        cleaned = ''.join(value.split()).replace('.', '').replace(',', '.')
        if not cleaned:
            return None
        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            return None
    return _to_decimal(value)


def format_amount(value: Optional[Number]) -> str:
    """
    Render with two decimals in the Danish convention: 1234.5 -> "1.234,50".

    None and non-finite values render as "0,00".
    """
    amount = _to_decimal(value)
    if amount is None:
        amount = Decimal('0')
    return f"{_to_cents(amount):,.2f}".translate(_TO_DANISH)


def format_currency(value: Optional[Number]) -> str:
    return f"{format_amount(value)} kr."


def format_percent(value: Number) -> str:
    """9.9 -> "9,90 %"."""
    rate = _to_decimal(value)
    if rate is None:
        rate = Decimal('0')
    return f"{_to_cents(rate):.2f}".replace('.', ',') + " %"
