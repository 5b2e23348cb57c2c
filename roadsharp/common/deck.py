"""
This module contains the Deck class, which represents a single 52-card deck.

>>> deck = Deck()
>>> deck.size
52
"""

from typing import List, Optional

from roadsharp.common.card import Card, Rank, Suit


class Deck:
    """
    A class representing a deck of cards.
    """

    # Precompute the default deck
    _default_deck = [Card(suit, rank) for suit in Suit for rank in Rank]

    def __init__(self, cards: Optional[List[Card]] = None):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a default deck will be constructed.
        """
        if cards is None:
            self.cards: List[Card] = self._default_deck.copy()
        else:
            self.cards = list(cards)

    @property
    def size(self) -> int:
        """Return the number of cards in the deck."""
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
