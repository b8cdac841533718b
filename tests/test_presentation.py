"""Tests for the detail pop-up display rules."""
from decimal import Decimal

import pytest

from conftest import make_record
from storesearch.catalog.presentation import artist_display, item_detail, price_text
from storesearch.catalog.schemas import CatalogItem


def item(price="0.99", currency="USD", artist="Band"):
    return CatalogItem(name="Tune", artist_name=artist, currency_code=currency, price=Decimal(price))


def test_unknown_artist_placeholder():
    assert artist_display(item(artist="")) == "Unknown"
    assert artist_display(item(artist="Band")) == "Band"


@pytest.mark.parametrize("price,currency,expected", [
    ("0", "USD", "Free"),
    ("0.99", "USD", "$0.99"),
    ("4", "EUR", "€4.00"),
    ("1234.5", "GBP", "£1,234.50"),
    ("250", "JPY", "¥250"),
    ("12", "SEK", "12.00 SEK"),
    ("12", "", "12.00"),
    ("1E+30", "USD", "$1,000,000,000,000,000,000,000,000,000,000.00"),
    ("123456789012345678901234567890.5", "SEK", "123,456,789,012,345,678,901,234,567,890.50 SEK"),
])
def test_price_text(price, currency, expected):
    assert price_text(item(price=price, currency=currency)) == expected


def test_item_detail_keeps_raw_item():
    raw = item(artist="")
    detail = item_detail(raw)
    assert detail.item == raw
    assert detail.item.artist_name == ""
    assert detail.artist_display == "Unknown"
    assert detail.price_text == "$0.99"


def test_price_text_for_parsed_huge_price():
    parsed = CatalogItem.parse(make_record("big", price=1e30))
    assert price_text(parsed) == "$1,000,000,000,000,000,000,000,000,000,000.00"
