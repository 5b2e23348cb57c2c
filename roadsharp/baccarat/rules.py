"""
Baccarat rules and drawing logic.

Baccarat has fixed drawing rules - no player decisions after betting.
The rules determine when Player and Banker draw a third card.
"""

from dataclasses import dataclass

from roadsharp.baccarat.constants import (
    BANKER_DRAW_MAX_WHEN_PLAYER_STANDS,
    BANKER_DRAWS_AGAINST,
    MAX_CARDS_PER_ROUND,
    PLAYER_DRAW_MAX,
)


@dataclass
class BaccaratRules:
    """
    Configuration for dealing a Baccarat shoe.

    Attributes:
        num_decks: Number of decks in the shoe
        reserve_cards: Cards left undealt at the back of the shoe
        min_cards_per_round: A new round is only started with this many cards left
        burn_by_first_card: Burn cards at the start of a shoe as the first card dictates
    """

    num_decks: int = 8  # Standard is 8 decks
    reserve_cards: int = 15
    min_cards_per_round: int = MAX_CARDS_PER_ROUND
    burn_by_first_card: bool = True


def player_draws_third_card(player_value: int) -> bool:
    """
    Determine if Player draws a third card.

    Player drawing rules:
    - 0-5: Draw
    - 6-7: Stand
    - 8-9: Natural (no draw)

    Args:
        player_value: Player's two-card total

    Returns:
        True if Player should draw, False otherwise
    """
    return player_value <= PLAYER_DRAW_MAX


def banker_draws_third_card(banker_value: int, player_drew: bool, player_third_card: int) -> bool:
    """
    Determine if Banker draws a third card.

    Rules:
    - If Player didn't draw: Banker draws on 0-5, stands on 6-7
    - If Player drew:
      - Banker 0-2: Always draw
      - Banker 3: Draw unless Player's 3rd card is 8
      - Banker 4: Draw if Player's 3rd card is 2-7
      - Banker 5: Draw if Player's 3rd card is 4-7
      - Banker 6: Draw if Player's 3rd card is 6-7
      - Banker 7: Stand
      - Banker 8-9: Natural (no draw)

    Args:
        banker_value: Banker's two-card total
        player_drew: Whether Player drew a third card
        player_third_card: Value of Player's third card (0-9, or -1 if no third card)

    Returns:
        True if Banker should draw, False otherwise
    """
    if not player_drew:
        return banker_value <= BANKER_DRAW_MAX_WHEN_PLAYER_STANDS

    return player_third_card in BANKER_DRAWS_AGAINST.get(banker_value, frozenset())
