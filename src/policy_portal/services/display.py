# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Display formatting. Amounts are shown, never converted."""

from datetime import date
from decimal import Decimal

from beartype import beartype

from ..core.config import get_settings


@beartype
def format_premium(amount: Decimal, symbol: str | None = None) -> str:
    """``₹1,200`` or ``₹1,250.50``; whole amounts drop the decimals.

    The symbol defaults to the configured currency symbol.
    """
    if symbol is None:
        symbol = get_settings().currency_symbol
    if amount == amount.to_integral_value():
        return f"{symbol}{int(amount):,}"
    return f"{symbol}{amount.quantize(Decimal('0.01')):,}"


@beartype
def format_expiry_date(value: date) -> str:
    """``05 Mar 2026``."""
    return value.strftime("%d %b %Y")


@beartype
def format_confidence(confidence: float) -> str:
    """Whole percentage, e.g. ``87%``."""
    return f"{confidence * 100:.0f}%"
