"""
Baccarat game engine.

`resolve_round` turns two initial hands and a card source into a
`RoundOutcome`. `BaccaratGame` deals whole shoes: it burns the opening cards,
deals rounds in Player-Banker-Player-Banker order, resolves them and feeds
every outcome to a `RoadmapEngine`.
"""

import logging
from typing import Callable, List, Optional, Sequence, Union

from roadsharp.baccarat.constants import BURN_COUNTS
from roadsharp.baccarat.hand import BaccaratHand
from roadsharp.baccarat.rules import (
    BaccaratRules,
    banker_draws_third_card,
    player_draws_third_card,
)
from roadsharp.common.card import Card
from roadsharp.common.errors import InvalidHandError, ShoeExhaustedError
from roadsharp.common.outcome import RoundOutcome, Winner
from roadsharp.common.shoe import CardSource, SequenceCardSource, Shoe
from roadsharp.roadmap.engine import RoadmapEngine
from roadsharp.roadmap.layout import RoadmapConfig
from roadsharp.roadmap.statistics import ShoeStatistics

logger = logging.getLogger(__name__)

DrawSource = Union[CardSource, Callable[[], Card]]


def _validate_initial_hand(side: str, cards: Sequence[Card]) -> None:
    if isinstance(cards, (str, bytes)) or not hasattr(cards, "__len__"):
        raise InvalidHandError(f"{side} hand must be a sequence of two cards, got {cards!r}")
    if len(cards) != 2:
        logger.warning("Rejected %s hand with %d cards", side, len(cards))
        raise InvalidHandError(f"{side} hand must hold exactly 2 cards, got {len(cards)}")
    for card in cards:
        if not isinstance(card, Card):
            raise InvalidHandError(f"{side} hand holds a non-card value: {card!r}")


def _draw_function(source: DrawSource) -> Callable[[], Card]:
    if isinstance(source, CardSource):
        return source.draw
    if callable(source):

        def draw() -> Card:
            try:
                card = source()
            except StopIteration as exc:
                raise ShoeExhaustedError("Card source ran out of cards") from exc
            if not isinstance(card, Card):
                raise TypeError(f"Card source returned a non-card value: {card!r}")
            return card

        return draw
    raise TypeError(f"Card source must be a CardSource or a callable, got {source!r}")


def determine_winner(player_value: int, banker_value: int) -> Winner:
    """Higher total wins; equal totals tie."""
    if player_value > banker_value:
        return Winner.PLAYER
    elif banker_value > player_value:
        return Winner.BANKER
    else:
        return Winner.TIE


def resolve_round(
    player_initial: Sequence[Card],
    banker_initial: Sequence[Card],
    source: DrawSource,
    round_number: Optional[int] = None,
) -> RoundOutcome:
    """
    Resolve one round from its initial cards.

    This follows the standard Baccarat drawing rules:
    1. Check for naturals (8 or 9) - no more cards dealt
    2. Determine if Player draws third card
    3. Determine if Banker draws third card (depends on Player's action)

    Args:
        player_initial: Player's first two cards
        banker_initial: Banker's first two cards
        source: Where third cards come from; called at most twice
        round_number: Optional round number to stamp on the outcome

    Returns:
        The completed RoundOutcome

    Raises:
        InvalidHandError: If either initial hand does not hold exactly two cards
        ShoeExhaustedError: If the source runs out while a third card is due
        TypeError: If a callable source returns something other than a Card
    """
    _validate_initial_hand("Player", player_initial)
    _validate_initial_hand("Banker", banker_initial)
    draw = _draw_function(source)

    player_hand = BaccaratHand(player_initial)
    banker_hand = BaccaratHand(banker_initial)
    is_natural = player_hand.is_natural() or banker_hand.is_natural()

    if not is_natural:
        player_drew = False
        if player_draws_third_card(player_hand.value()):
            player_hand.add_card(draw())
            player_drew = True

        if banker_draws_third_card(
            banker_hand.value(), player_drew, player_hand.third_card_value()
        ):
            banker_hand.add_card(draw())

    player_value = player_hand.value()
    banker_value = banker_hand.value()
    return RoundOutcome(
        winner=determine_winner(player_value, banker_value),
        player_total=player_value,
        banker_total=banker_value,
        is_player_pair=player_hand.is_pair(),
        is_banker_pair=banker_hand.is_pair(),
        is_natural=is_natural,
        round_number=round_number,
        player_cards=tuple(player_hand.cards),
        banker_cards=tuple(banker_hand.cards),
    )


def verify_round(
    player_cards: Sequence[Card], banker_cards: Sequence[Card], winner: Winner
) -> bool:
    """
    Check that a recorded round obeys the drawing rules and has the right winner.

    The initial cards are replayed with the recorded third cards as the only
    cards available. The record is valid when the replay draws exactly those
    cards and reaches the same winner. An unknown winner is never valid.
    """
    try:
        winner = Winner(winner)
    except ValueError:
        return False
    if not 2 <= len(player_cards) <= 3 or not 2 <= len(banker_cards) <= 3:
        return False

    third_cards = list(player_cards[2:]) + list(banker_cards[2:])
    source = SequenceCardSource(third_cards)
    try:
        replayed = resolve_round(player_cards[:2], banker_cards[:2], source)
    except ShoeExhaustedError:
        # A third card was due but the record has none
        return False

    return (
        source.cards_remaining == 0
        and list(replayed.player_cards) == list(player_cards)
        and list(replayed.banker_cards) == list(banker_cards)
        and replayed.winner is winner
    )


class BaccaratGame:
    """
    Deals baccarat shoes and keeps their roads up to date.

    One game owns one shoe at a time and one RoadmapEngine per shoe; starting
    a new shoe starts a fresh engine.
    """

    def __init__(
        self,
        rules: Optional[BaccaratRules] = None,
        shoe: Optional[Shoe] = None,
        config: Optional[RoadmapConfig] = None,
        seed=None,
    ):
        """
        Initialize a Baccarat game.

        Args:
            rules: Game rules configuration
            shoe: Card shoe (a new shuffled and burned shoe is created if not provided)
            config: Roadmap display configuration
            seed: Seed for the shoe shuffle when the game creates the shoe
        """
        self.rules = rules if rules else BaccaratRules()
        self.config = config if config else RoadmapConfig()
        self.shoes_played = 0
        self.burned_cards: List[Card] = []

        if shoe:
            self.shoe = shoe
            self.roadmap = RoadmapEngine(self.config)
            self.shoes_played = 1
        else:
            self.start_new_shoe(seed)

    def start_new_shoe(self, seed=None) -> List[Card]:
        """
        Shuffle a fresh shoe, burn the opening cards and reset the roads.

        The first card is turned over and that many further cards are burned
        (ten for 10/J/Q/K).

        Returns:
            The burned cards, first card included
        """
        self.shoe = Shoe(
            num_decks=self.rules.num_decks,
            seed=seed,
            reserve=self.rules.reserve_cards,
        )
        self.burned_cards = []
        if self.rules.burn_by_first_card:
            first_card = self.shoe.burn(1)[0]
            self.burned_cards = [first_card] + self.shoe.burn(BURN_COUNTS[first_card.rank])

        self.roadmap = RoadmapEngine(self.config)
        self.shoes_played += 1
        logger.info(
            "Started shoe %d: %d decks, %d cards burned",
            self.shoes_played,
            self.rules.num_decks,
            len(self.burned_cards),
        )
        return list(self.burned_cards)

    def needs_new_shoe(self) -> bool:
        """True once the shoe cannot be trusted to finish another round."""
        return not self.shoe.can_deal(self.rules.min_cards_per_round)

    def deal_initial_cards(self):
        """
        Deal initial four cards (2 to Player, 2 to Banker).

        Order: Player, Banker, Player, Banker
        """
        first = [self.shoe.draw() for _ in range(4)]
        return [first[0], first[2]], [first[1], first[3]]

    def play_round(self) -> RoundOutcome:
        """
        Play a complete round of Baccarat and add it to the roads.

        Raises:
            ShoeExhaustedError: If the shoe has reached its cut point
        """
        if self.needs_new_shoe():
            raise ShoeExhaustedError(
                f"Only {self.shoe.cards_remaining} cards left, a round needs "
                f"{self.rules.min_cards_per_round}"
            )

        player_initial, banker_initial = self.deal_initial_cards()
        outcome = resolve_round(
            player_initial,
            banker_initial,
            self.shoe,
            round_number=self.roadmap.next_round_number,
        )
        self.roadmap.append(outcome)
        return outcome

    def play_shoe(self, max_rounds: Optional[int] = None) -> List[RoundOutcome]:
        """Play rounds until the shoe is done or `max_rounds` have been played."""
        outcomes = []
        while not self.needs_new_shoe():
            if max_rounds is not None and len(outcomes) >= max_rounds:
                break
            outcomes.append(self.play_round())
        logger.info("Shoe %d finished after %d rounds", self.shoes_played, len(outcomes))
        return outcomes

    @property
    def rounds_played(self) -> int:
        return len(self.roadmap.history)

    def get_statistics(self) -> ShoeStatistics:
        return self.roadmap.statistics

    def __str__(self) -> str:
        return f"Baccarat Game: {self.rounds_played} rounds played"

    def __repr__(self) -> str:
        stats = self.get_statistics()
        return (
            f"BaccaratGame(rounds={self.rounds_played}, P:{stats.player_wins}, "
            f"B:{stats.banker_wins}, T:{stats.ties})"
        )
