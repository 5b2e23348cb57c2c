"""
Card sources for the rules engine.

A card source exposes a single fallible operation, `draw()`, which returns the
next card or raises `ShoeExhaustedError`. `Shoe` is the multi-deck shoe used
for live play and simulation; `SequenceCardSource` replays a fixed list of
cards, which is how recorded rounds are re-resolved.
"""

import logging
import random
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union

from roadsharp.common.card import Card
from roadsharp.common.deck import Deck
from roadsharp.common.errors import ShoeExhaustedError

logger = logging.getLogger(__name__)


class CardSource(ABC):
    """
    An abstract source of cards.

    Subclasses must return the next card from `draw` and raise
    `ShoeExhaustedError` once nothing is left to deal.
    """

    @abstractmethod
    def draw(self) -> Card:
        """Return the next card."""


class SequenceCardSource(CardSource):
    """A card source that deals a fixed sequence of cards in order."""

    def __init__(self, cards: Iterable[Card]):
        self._cards: List[Card] = list(cards)
        self._index = 0

    def draw(self) -> Card:
        if self._index >= len(self._cards):
            raise ShoeExhaustedError(
                f"Card sequence exhausted after {len(self._cards)} cards"
            )
        card = self._cards[self._index]
        self._index += 1
        return card

    @property
    def cards_dealt(self) -> int:
        """Number of cards handed out so far."""
        return self._index

    @property
    def cards_remaining(self) -> int:
        return len(self._cards) - self._index

    def __repr__(self) -> str:
        return f"SequenceCardSource(dealt={self._index}, remaining={self.cards_remaining})"


class Shoe(CardSource):
    def __init__(
        self,
        num_decks: int = 8,
        seed: Optional[Union[int, str]] = None,
        reserve: int = 15,
        cards: Optional[List[Card]] = None,
    ):
        """
        Initialize a Shoe instance.

        :param num_decks: Number of decks to use in the shoe (default is 8)
        :param seed: Optional seed for a reproducible shuffle
        :param reserve: Number of cards left undealt at the back of the shoe
        :param cards: Optional pre-arranged cards; when given they are dealt in
                      order and the shoe is not shuffled
        """
        if num_decks < 1:
            raise ValueError(f"A shoe needs at least one deck, got {num_decks}")
        if reserve < 0:
            raise ValueError(f"Reserve must be non-negative, got {reserve}")

        self.num_decks = num_decks
        self.seed = seed
        self.reserve = reserve
        self._rng = random.Random(seed)
        self.burned_cards: List[Card] = []
        self.next_card_index = 0

        if cards is not None:
            self.cards = list(cards)
        else:
            self.cards = []
            for _ in range(num_decks):
                self.cards.extend(Deck().cards)
            self.shuffle()

    @property
    def total_cards(self) -> int:
        return len(self.cards)

    def shuffle(self) -> None:
        """Shuffle every card back into the shoe and restart dealing."""
        self._rng.shuffle(self.cards)
        self.next_card_index = 0
        self.burned_cards = []
        logger.debug("Shuffled %d cards (seed=%r)", self.total_cards, self.seed)

    def draw(self) -> Card:
        """
        Deal the next card.

        :raises ShoeExhaustedError: When only the reserved cards remain.
        """
        if self.cards_remaining <= 0:
            raise ShoeExhaustedError(
                f"Shoe exhausted: {self.next_card_index} of {self.total_cards} "
                f"cards dealt with {self.reserve} held in reserve"
            )
        card = self.cards[self.next_card_index]
        self.next_card_index += 1
        return card

    def burn(self, count: int) -> List[Card]:
        """Deal `count` cards face down and keep them aside."""
        burned = [self.draw() for _ in range(count)]
        self.burned_cards.extend(burned)
        logger.debug("Burned %d cards", count)
        return burned

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards that can still be dealt."""
        return max(0, self.total_cards - self.next_card_index - self.reserve)

    def can_deal(self, num_cards: int) -> bool:
        return self.cards_remaining >= num_cards

    def get_burned_cards(self) -> List[Card]:
        """Return the list of burned cards since the last shuffle."""
        return self.burned_cards.copy()

    def __str__(self) -> str:
        return f"Shoe with {self.cards_remaining} cards remaining"

    def __repr__(self) -> str:
        return f"Shoe(num_decks={self.num_decks}, seed={self.seed!r}, reserve={self.reserve})"
