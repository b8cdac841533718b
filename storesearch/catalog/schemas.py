"""
Pydantic schema definitions for the catalog module.

``CatalogItem`` captures one hit returned by the iTunes Search API in
the shape the presentation layer needs.  ``Category`` is the closed
set of content filters a caller may pick from.  The search outcome is
exposed as one of four small state models (``NotSearchedYet``,
``Loading``, ``NoResults`` and ``Results``) discriminated by their
``state`` field, so that any front-end can switch on a single key.
"""

from __future__ import annotations

import functools
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing_extensions import Annotated

from .errors import ItemParseError


class Category(str, Enum):
    """Content filter applied to a search."""

    ALL = "all"
    MUSIC = "music"
    SOFTWARE = "software"
    EBOOKS = "ebooks"

    @property
    def entity(self) -> Optional[str]:
        """Entity token understood by the remote endpoint (``None`` means no filter)."""
        return _ENTITY_TOKENS[self]


_ENTITY_TOKENS = {
    Category.ALL: None,
    Category.MUSIC: "musicTrack",
    Category.SOFTWARE: "software",
    Category.EBOOKS: "ebook",
}


# Remote record keys, in order of preference.  Tracks, apps and e-books
# do not share one schema, so every field may come from several keys.
_NAME_KEYS = ("trackName", "collectionName")
_KIND_KEYS = ("kind", "wrapperType")
_PRICE_KEYS = ("trackPrice", "price", "collectionPrice")
_STORE_URL_KEYS = ("trackViewUrl", "collectionViewUrl")


def _first_str(raw: dict, keys: Iterable[str]) -> str:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str):
            return value
    return ""


def _genre(raw: dict) -> str:
    genre = _first_str(raw, ("primaryGenreName",))
    if genre:
        return genre
    # E-books list their genres instead of a primary one
    genres = raw.get("genres") or []
    if isinstance(genres, list):
        return ", ".join(g for g in genres if isinstance(g, str))
    return ""


def _price(raw: dict) -> Decimal:
    negative = None
    for key in _PRICE_KEYS:
        if key not in raw:
            continue
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ItemParseError(f"{key} is not a number: {value!r}")
        if isinstance(value, float) and not math.isfinite(value):
            raise ItemParseError(f"{key} is not finite: {value!r}")
        if value < 0:
            # Album-only tracks report trackPrice -1 next to a real collectionPrice
            negative = negative or f"{key} is negative: {value!r}"
            continue
        # str() keeps 0.99 as Decimal("0.99") instead of its binary expansion
        return Decimal(str(value))
    raise ItemParseError(negative or "record has no price")


class CatalogItem(BaseModel):
    """A single search hit.

    Instances are immutable.  ``artist_name`` may be empty; renderers
    substitute a placeholder, the model never does.  URLs are opaque
    strings and are never fetched by the core.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    artist_name: str = ""
    kind: str = ""
    genre: str = ""
    currency_code: str = ""
    price: Decimal = Field(..., ge=0)
    artwork_small_url: str = ""
    artwork_large_url: str = ""
    store_url: str = ""

    @classmethod
    def parse(cls, raw: Any) -> "CatalogItem":
        """Build an item from one decoded record of the ``results`` list.

        Raises ``ItemParseError`` when the record is not an object, has
        no usable name, or carries a missing or invalid price.  Every
        other field is optional and defaults to an empty string.
        """
        if not isinstance(raw, dict):
            raise ItemParseError(f"record is not an object: {type(raw).__name__}")
        name = _first_str(raw, _NAME_KEYS)
        if not name.strip():
            raise ItemParseError("record has no name")
        try:
            return cls(
                name=name,
                artist_name=_first_str(raw, ("artistName",)),
                kind=_first_str(raw, _KIND_KEYS),
                genre=_genre(raw),
                currency_code=_first_str(raw, ("currency",)),
                price=_price(raw),
                artwork_small_url=_first_str(raw, ("artworkUrl60",)),
                artwork_large_url=_first_str(raw, ("artworkUrl100",)),
                store_url=_first_str(raw, _STORE_URL_KEYS),
            )
        except ValidationError as exc:
            raise ItemParseError(str(exc)) from exc


def compare_by_name(a: CatalogItem, b: CatalogItem) -> int:
    """Case-insensitive, locale-naive comparison of two items by name."""
    left, right = a.name.casefold(), b.name.casefold()
    return (left > right) - (left < right)


def sort_by_name(items: Iterable[CatalogItem]) -> List[CatalogItem]:
    """Return ``items`` ordered by name; equal names keep their original order."""
    return sorted(items, key=functools.cmp_to_key(compare_by_name))


class NotSearchedYet(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["not_searched_yet"] = "not_searched_yet"


class Loading(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["loading"] = "loading"


class NoResults(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["no_results"] = "no_results"


class Results(BaseModel):
    """Outcome of a search that returned at least one item, sorted by name."""

    model_config = ConfigDict(frozen=True)

    state: Literal["results"] = "results"
    items: Tuple[CatalogItem, ...] = Field(..., min_length=1)


SearchState = Annotated[
    Union[NotSearchedYet, Loading, NoResults, Results],
    Field(discriminator="state"),
]

NOT_SEARCHED_YET = NotSearchedYet()
LOADING = Loading()
NO_RESULTS = NoResults()


class SearchRequest(BaseModel):
    """Body of ``POST /api/search``."""

    term: str
    category: Category = Category.ALL


class ItemDetail(BaseModel):
    """One result as shown in the detail pop-up."""

    item: CatalogItem
    artist_display: str
    price_text: str
