"""Portable deck format shared with the game client.

A portable deck is the JSON object ``{"deckName": str, "counts": {name: qty}}``
that users copy to and paste from the clipboard. Card names in ``counts`` are
squashed by :func:`normalize_card_name`, which loses spacing and punctuation,
so importing has to match names back against the catalog fuzzily.
"""

import json
import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from deckshare.core.enums import DeckColor
from deckshare.core.exceptions import FormatError, ValidationError
from deckshare.models.card import Card
from deckshare.models.deck import Deck
from deckshare.schemas.deck import DeckImportResult, ImportedCard, PortableDeck

LOWERCASE_WORDS = frozenset({"a", "the", "of"})
UPPERCASE_WORDS = frozenset({"OK"})
TITLE_MAX_LENGTH = 50

_NOT_ALNUM_OR_SPACE = re.compile(r"[^A-Za-z0-9\s]")
_SPACES_APOSTROPHES = re.compile(r"[\s']")
_SPACES_PUNCTUATION = re.compile(r"[\s'`,]")
_NOT_ALNUM = re.compile(r"[^A-Za-z0-9]")


def normalize_card_name(name: str) -> str:
    """Return the portable key for a catalog card name.

    >>> normalize_card_name("a Fish Called OK")
    'aFishCalledOK'
    >>> normalize_card_name("King of the Hill's")
    'KingoftheHills'
    """
    words = _NOT_ALNUM_OR_SPACE.sub("", name).split()
    normalized: list[str] = []
    for word in words:
        if word.upper() in UPPERCASE_WORDS:
            normalized.append(word.upper())
        elif word.lower() in LOWERCASE_WORDS:
            normalized.append(word.lower())
        else:
            normalized.append(word[0].upper() + word[1:].lower())
    return "".join(normalized)


def build_counts(entries: Iterable[tuple[str, int]]) -> dict[str, int]:
    """Sum quantities per normalized name; colliding names are merged, not overwritten."""
    counts: dict[str, int] = {}
    for name, quantity in entries:
        key = normalize_card_name(name)
        counts[key] = counts.get(key, 0) + quantity
    return counts


def export_deck(deck: Deck) -> PortableDeck:
    """Encode a deck (with ``cards`` and each ``card`` loaded) as a portable deck."""
    counts = build_counts((deck_card.card.name, deck_card.quantity) for deck_card in deck.cards)
    return PortableDeck(deck_name=deck.title, counts=counts)


_VARIANT_PATTERNS: tuple[re.Pattern[str] | None, ...] = (
    None,
    _SPACES_APOSTROPHES,
    _SPACES_PUNCTUATION,
    _NOT_ALNUM,
)


def _variant_slots(name: str) -> list[str | None]:
    """One lowercase lookup key per pattern, ``None`` where it adds nothing new."""
    slots: list[str | None] = []
    seen: set[str] = set()
    for pattern in _VARIANT_PATTERNS:
        key = (pattern.sub("", name) if pattern else name).lower()
        if not key or key in seen:
            slots.append(None)
        else:
            seen.add(key)
            slots.append(key)
    return slots


def name_variants(name: str) -> list[str]:
    """Lookup keys for a card name, from the most to the least literal."""
    return [key for key in _variant_slots(name) if key is not None]


@dataclass(frozen=True)
class CatalogIndex:
    by_export_key: dict[str, Card] = field(default_factory=dict)
    """Case-sensitive ``normalize_card_name`` keys, the form exports use"""
    by_variant: dict[str, Card] = field(default_factory=dict)


def build_catalog_index(catalog: Iterable[Card]) -> CatalogIndex:
    """Index the catalog by export key and by every lookup variant.

    Variants are registered one pattern at a time, so an exact name always
    takes precedence over a squashed variant of some other card.
    """
    cards = list(catalog)
    index = CatalogIndex()
    for card in cards:
        if key := normalize_card_name(card.name):
            index.by_export_key.setdefault(key, card)

    per_card = [(card, _variant_slots(card.name)) for card in cards]
    for slot in range(len(_VARIANT_PATTERNS)):
        for card, slots in per_card:
            key = slots[slot]
            if key is not None:
                index.by_variant.setdefault(key, card)
    return index


def match_card(name: str, index: CatalogIndex) -> Card | None:
    card = index.by_export_key.get(name)
    if card is not None:
        return card

    for variant in name_variants(name):
        card = index.by_variant.get(variant)
        if card is not None:
            return card
    return None


def parse_portable_deck(payload: str | Mapping[str, Any]) -> PortableDeck:
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError:
            raise FormatError("Clipboard content is not valid JSON") from None

    if not isinstance(payload, Mapping):
        raise FormatError("Deck data must be a JSON object")
    if "deckName" not in payload or "counts" not in payload:
        raise FormatError("Invalid deck format: deckName and counts are required")

    try:
        portable = PortableDeck.model_validate(payload)
    except PydanticValidationError:
        raise FormatError("Invalid deck format: counts must map card names to numbers") from None

    bad = [name for name, quantity in portable.counts.items() if quantity < 1]
    if bad:
        raise FormatError(f"Invalid quantity for: {', '.join(bad)}")
    return portable


def infer_deck_color(matches: Iterable[tuple[Card, int]]) -> DeckColor:
    """Pick the deck color from quantity-weighted card colors.

    The leading color wins only with a strict majority of the cards and only
    if it is also a deck color; anything else is ``MIXED``.
    """
    totals: Counter[str] = Counter()
    for card, quantity in matches:
        totals[str(card.color)] += quantity

    total = sum(totals.values())
    if not total:
        return DeckColor.MIXED

    color, count = totals.most_common(1)[0]
    if count * 2 <= total:
        return DeckColor.MIXED
    return DeckColor.__members__.get(color, DeckColor.MIXED)


def import_deck(payload: str | Mapping[str, Any], catalog: Sequence[Card]) -> DeckImportResult:
    """Decode a portable deck against the catalog.

    Names that match no card are reported in ``not_found_cards`` and skipped.

    Raises:
        FormatError: The payload is not a portable deck.
        ValidationError: None of the names matched a catalog card.
    """
    portable = parse_portable_deck(payload)
    index = build_catalog_index(catalog)

    matched: dict[int, tuple[Card, int]] = {}
    not_found: list[str] = []
    for name, quantity in portable.counts.items():
        card = match_card(name, index)
        if card is None:
            not_found.append(name)
            continue
        _, previous = matched.get(card.id, (card, 0))
        matched[card.id] = (card, previous + quantity)

    if not matched:
        raise ValidationError("No valid cards found in the imported deck")

    if not_found:
        logger.info(f"Deck import skipped {len(not_found)} unknown card(s): {not_found}")

    return DeckImportResult(
        title=portable.deck_name.strip()[:TITLE_MAX_LENGTH],
        color=infer_deck_color(matched.values()),
        cards=[
            ImportedCard(card_id=card.id, name=card.name, color=card.color, quantity=quantity)
            for card, quantity in matched.values()
        ],
        not_found_cards=not_found,
    )
