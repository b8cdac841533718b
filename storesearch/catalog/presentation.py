"""
Display rules for a single result, as applied by the detail pop-up.

The model keeps raw values; these helpers decide what a renderer shows
for them.
"""

import decimal
from decimal import Decimal

from .schemas import CatalogItem, ItemDetail


UNKNOWN_ARTIST = "Unknown"
FREE_PRICE = "Free"

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
}
# Currencies without minor units
_ZERO_DECIMAL = {"JPY", "KRW"}


def artist_display(item: CatalogItem) -> str:
    return item.artist_name or UNKNOWN_ARTIST


def price_text(item: CatalogItem) -> str:
    """Format the price for a button label: ``"Free"``, ``"$0.99"``, ``"12.00 SEK"``..."""
    if item.price == 0:
        return FREE_PRICE
    code = item.currency_code.upper()
    places = Decimal(1) if code in _ZERO_DECIMAL else Decimal("0.01")
    with decimal.localcontext() as ctx:
        # Large catalog prices overflow the default 28-digit precision
        ctx.prec = max(ctx.prec, item.price.adjusted() + 3)
        amount = f"{item.price.quantize(places):,}"
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{amount}"
    if code:
        return f"{amount} {code}"
    return amount


def item_detail(item: CatalogItem) -> ItemDetail:
    return ItemDetail(item=item, artist_display=artist_display(item), price_text=price_text(item))
