"""
Comprehensive tests for the Baccarat rules engine.

Tests cover:
- Hand value calculation (modulo 10)
- Natural and pair detection
- Player drawing rules
- Banker drawing rules (the full tableau)
- Round resolution and its failure modes
- Verification of recorded rounds
- Dealing whole shoes
"""

import pytest

from roadsharp.baccarat import (
    BaccaratGame,
    BaccaratHand,
    BaccaratRules,
    resolve_round,
    verify_round,
)
from roadsharp.baccarat.constants import BURN_COUNTS, get_baccarat_value
from roadsharp.baccarat.rules import banker_draws_third_card, player_draws_third_card
from roadsharp.common.card import Card, Rank, Suit
from roadsharp.common.errors import (
    ContractViolationError,
    InvalidHandError,
    ShoeExhaustedError,
)
from roadsharp.common.outcome import Winner
from roadsharp.common.shoe import SequenceCardSource, Shoe
from roadsharp.roadmap.engine import compute_all

# Banker total -> Player third-card values on which Banker draws
BANKER_TABLEAU = {
    0: set(range(10)),
    1: set(range(10)),
    2: set(range(10)),
    3: {0, 1, 2, 3, 4, 5, 6, 7, 9},
    4: {2, 3, 4, 5, 6, 7},
    5: {4, 5, 6, 7},
    6: {6, 7},
    7: set(),
}


def c(rank, suit=Suit.SPADES):
    return Card(suit, Rank(rank))


def card_worth(value, suit=Suit.SPADES):
    """A card with the given baccarat value (0 is a ten)."""
    return c(value if value else 10, suit)


def no_draw():
    raise AssertionError("No card should be drawn")


class TestBaccaratHand:
    """Tests for BaccaratHand value calculation."""

    def test_empty_hand(self):
        """An empty hand is worth zero."""
        hand = BaccaratHand()
        assert hand.value() == 0
        assert hand.card_count() == 0

    def test_modulo_10_calculation(self):
        """Test that values wrap at 10 (modulo 10)."""
        assert BaccaratHand([c(9), c(8)]).value() == 7
        assert BaccaratHand([c(10), c(13)]).value() == 0

    def test_face_cards_worth_zero(self):
        """Test that 10, J, Q, K count as zero."""
        for rank in [Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING]:
            assert get_baccarat_value(rank) == 0
            assert BaccaratHand([c(rank), c(5)]).value() == 5

    def test_ace_worth_one(self):
        """Test that an Ace counts as one."""
        assert BaccaratHand([c(Rank.ACE), c(4)]).value() == 5

    def test_naturals(self):
        """Test that two-card 8 and 9 are naturals."""
        assert BaccaratHand([c(3), c(5)]).is_natural()
        assert BaccaratHand([c(4), c(5)]).is_natural()
        assert not BaccaratHand([c(4), c(3)]).is_natural()

    def test_not_natural_with_three_cards(self):
        """A three-card 9 is not a natural."""
        hand = BaccaratHand([c(4), c(4), c(1)])
        assert hand.value() == 9
        assert not hand.is_natural()

    def test_pair_uses_first_two_cards_only(self):
        """Pairs need matching ranks on the first two cards."""
        assert BaccaratHand([c(7, Suit.HEARTS), c(7, Suit.CLUBS)]).is_pair()
        assert not BaccaratHand([c(7), c(2), c(7)]).is_pair()
        # Same value, different rank is not a pair
        assert not BaccaratHand([c(10), c(13)]).is_pair()

    def test_third_card_value(self):
        """Third card value is -1 until a third card is dealt."""
        hand = BaccaratHand([c(2), c(3)])
        assert hand.third_card_value() == -1
        hand.add_card(c(12))
        assert hand.third_card_value() == 0


class TestDrawingRules:
    """Tests for Player and Banker drawing rules."""

    def test_player_draws_on_0_through_5(self):
        """Test that Player draws on 0-5."""
        for value in range(6):
            assert player_draws_third_card(value), f"Player should draw on {value}"

    def test_player_stands_on_6_and_7(self):
        """Test that Player stands on 6-7."""
        for value in [6, 7]:
            assert not player_draws_third_card(value), f"Player should stand on {value}"

    def test_banker_when_player_stands(self):
        """Banker draws on 0-5 when Player stood."""
        for value in range(6):
            assert banker_draws_third_card(value, player_drew=False, player_third_card=-1)
        for value in [6, 7]:
            assert not banker_draws_third_card(value, player_drew=False, player_third_card=-1)

    @pytest.mark.parametrize("banker_value", range(8))
    @pytest.mark.parametrize("player_third", range(10))
    def test_banker_tableau(self, banker_value, player_third):
        """Banker draws exactly as the tableau says."""
        expected = player_third in BANKER_TABLEAU[banker_value]
        assert banker_draws_third_card(banker_value, True, player_third) == expected


class TestResolveRound:
    """Tests for resolve_round."""

    def test_player_natural_stops_drawing(self):
        """A Player natural ends the round on four cards."""
        outcome = resolve_round([c(4), c(5)], [c(10), c(13)], no_draw)
        assert outcome.winner is Winner.PLAYER
        assert outcome.player_total == 9
        assert outcome.banker_total == 0
        assert outcome.is_natural
        assert len(outcome.player_cards) == 2
        assert len(outcome.banker_cards) == 2

    def test_banker_natural_stops_player_draw(self):
        """A Banker natural stops Player from drawing on 5."""
        outcome = resolve_round([c(2), c(3)], [c(4), c(4)], no_draw)
        assert outcome.winner is Winner.BANKER
        assert outcome.is_natural
        assert outcome.player_total == 5
        assert outcome.banker_total == 8

    def test_both_stand(self):
        """Player 7 against Banker 6 deals no third cards."""
        outcome = resolve_round([c(3), c(4)], [c(6), c(10)], no_draw)
        assert outcome.winner is Winner.PLAYER
        assert not outcome.is_natural
        assert (outcome.player_total, outcome.banker_total) == (7, 6)

    def test_banker_draws_when_player_stands(self):
        """Banker draws on 5 after Player stands."""
        source = SequenceCardSource([c(4)])
        outcome = resolve_round([c(6), c(13)], [c(2), c(3)], source)
        assert source.cards_dealt == 1
        assert len(outcome.player_cards) == 2
        assert len(outcome.banker_cards) == 3
        assert outcome.banker_total == 9
        assert outcome.winner is Winner.BANKER

    def test_banker_3_stands_on_player_third_8(self):
        """Banker 3 stands when Player's third card is an 8."""
        source = SequenceCardSource([c(8), c(1)])
        outcome = resolve_round([c(2), c(3)], [c(3), c(13)], source)
        assert source.cards_dealt == 1
        assert len(outcome.banker_cards) == 2
        assert outcome.player_total == 3
        assert outcome.winner is Winner.TIE

    @pytest.mark.parametrize("banker_total", range(8))
    @pytest.mark.parametrize("third_value", range(10))
    def test_tableau_golden_cases(self, banker_total, third_value):
        """Every banker total against every Player third-card value."""
        player = [c(10), c(13)]
        banker = [card_worth(banker_total, Suit.HEARTS), c(11, Suit.HEARTS)]
        source = SequenceCardSource([card_worth(third_value), c(Rank.ACE, Suit.CLUBS)])

        outcome = resolve_round(player, banker, source)

        assert len(outcome.player_cards) == 3
        banker_drew = len(outcome.banker_cards) == 3
        assert banker_drew == (third_value in BANKER_TABLEAU[banker_total])
        assert source.cards_dealt == (2 if banker_drew else 1)
        assert not outcome.is_natural

    @pytest.mark.parametrize("banker_total", range(8))
    def test_tableau_when_player_stands(self, banker_total):
        """Every banker total when Player stands."""
        player = [c(6), c(10)]
        banker = [card_worth(banker_total, Suit.HEARTS), c(12, Suit.HEARTS)]
        source = SequenceCardSource([c(Rank.ACE)])

        outcome = resolve_round(player, banker, source)

        assert len(outcome.player_cards) == 2
        assert (len(outcome.banker_cards) == 3) == (banker_total <= 5)

    def test_pair_flags(self):
        """Pair flags are set for both sides."""
        source = SequenceCardSource([c(9)])
        outcome = resolve_round(
            [c(3, Suit.SPADES), c(3, Suit.HEARTS)],
            [c(5, Suit.CLUBS), c(5, Suit.DIAMONDS)],
            source,
        )
        assert outcome.is_player_pair
        assert outcome.is_banker_pair

    def test_third_card_never_makes_a_pair(self):
        """A third card matching the first is not a pair."""
        source = SequenceCardSource([c(2), c(1)])
        outcome = resolve_round([c(2), c(3)], [c(1), c(13)], source)
        assert len(outcome.player_cards) == 3
        assert not outcome.is_player_pair

    def test_round_number_stamped(self):
        """The round number is carried onto the outcome."""
        outcome = resolve_round([c(4), c(5)], [c(1), c(1)], no_draw, round_number=12)
        assert outcome.round_number == 12

    def test_callable_source(self):
        """A plain callable can supply third cards."""
        cards = iter([c(1), c(1)])
        outcome = resolve_round([c(10), c(10)], [c(10), c(10)], lambda: next(cards))
        assert outcome.player_total == 1
        assert outcome.banker_total == 1
        assert outcome.winner is Winner.TIE

    def test_exhausted_callable_source(self):
        """An exhausted iterator behind a callable reads as an exhausted shoe."""
        cards = iter([])
        with pytest.raises(ShoeExhaustedError):
            resolve_round([c(2), c(3)], [c(10), c(13)], lambda: next(cards))

    def test_callable_returning_non_card(self):
        """A callable source must hand back Card instances."""
        with pytest.raises(TypeError):
            resolve_round([c(2), c(3)], [c(10), c(13)], lambda: None)

    def test_exhausted_source_propagates(self):
        """Running out of cards raises ShoeExhaustedError."""
        with pytest.raises(ShoeExhaustedError):
            resolve_round([c(2), c(3)], [c(10), c(13)], SequenceCardSource([]))

    def test_exhaustion_is_not_a_contract_violation(self):
        """Exhaustion is kept apart from bad input."""
        with pytest.raises(ShoeExhaustedError) as excinfo:
            resolve_round([c(2), c(3)], [c(10), c(13)], SequenceCardSource([]))
        assert not isinstance(excinfo.value, ContractViolationError)

    @pytest.mark.parametrize("hand_size", [0, 1, 3])
    def test_wrong_hand_size_rejected(self, hand_size):
        """Initial hands must hold exactly two cards."""
        hand = [c(2)] * hand_size
        with pytest.raises(InvalidHandError):
            resolve_round(hand, [c(1), c(2)], no_draw)
        with pytest.raises(InvalidHandError):
            resolve_round([c(1), c(2)], hand, no_draw)

    def test_invalid_hand_is_a_value_error(self):
        """Invalid hands are also ValueErrors."""
        with pytest.raises(ValueError):
            resolve_round([c(2)], [c(1), c(2)], no_draw)

    def test_non_card_rejected(self):
        """Initial hands may only hold cards."""
        with pytest.raises(InvalidHandError):
            resolve_round([c(2), 5], [c(1), c(2)], no_draw)


class TestVerifyRound:
    """Tests for verify_round."""

    def test_resolved_round_verifies(self):
        """A freshly resolved round verifies."""
        source = SequenceCardSource([c(8), c(1)])
        outcome = resolve_round([c(2), c(3)], [c(3), c(13)], source)
        assert verify_round(outcome.player_cards, outcome.banker_cards, outcome.winner)

    def test_string_winner(self):
        """The winner may be given as a string."""
        assert verify_round([c(4), c(5)], [c(1), c(1)], "player")

    def test_wrong_winner(self):
        """A record with the wrong winner fails."""
        assert not verify_round([c(4), c(5)], [c(1), c(1)], Winner.BANKER)

    def test_missing_third_card(self):
        """A record missing a due third card fails."""
        # Player holds 5 and must draw
        assert not verify_round([c(2), c(3)], [c(6), c(10)], Winner.BANKER)

    def test_third_card_after_natural(self):
        """A third card after a natural fails."""
        assert not verify_round([c(4), c(5), c(1)], [c(1), c(1)], Winner.TIE)

    def test_banker_drew_when_it_should_stand(self):
        """A Banker draw on 7 fails."""
        # Banker 7 always stands
        assert not verify_round([c(6), c(10)], [c(3), c(4), c(2)], Winner.BANKER)

    def test_bad_card_counts(self):
        """Hands with fewer than two cards fail."""
        assert not verify_round([c(4)], [c(1), c(1)], Winner.PLAYER)

    def test_unknown_winner(self):
        """An unrecognised winner makes the record invalid instead of raising."""
        assert not verify_round([c(4), c(5)], [c(1), c(1)], "dragon")


class TestBaccaratGame:
    """Tests for dealing whole shoes."""

    def test_game_initialization(self):
        """A new game burns by its first card."""
        game = BaccaratGame(seed=1)
        assert game.rounds_played == 0
        assert game.shoes_played == 1
        first = game.burned_cards[0]
        assert len(game.burned_cards) == 1 + BURN_COUNTS[first.rank]

    def test_burn_counts(self):
        """Test burn counts for low and ten-valued cards."""
        assert BURN_COUNTS[Rank.ACE] == 1
        assert BURN_COUNTS[Rank.NINE] == 9
        for rank in [Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING]:
            assert BURN_COUNTS[rank] == 10

    def test_deal_order(self):
        """Cards are dealt Player, Banker, Player, Banker."""
        cards = [c(4), c(10), c(5), c(13)]
        game = BaccaratGame(shoe=Shoe(cards=cards, reserve=0), rules=BaccaratRules(min_cards_per_round=4))
        outcome = game.play_round()
        assert outcome.player_cards == (cards[0], cards[2])
        assert outcome.banker_cards == (cards[1], cards[3])
        assert outcome.winner is Winner.PLAYER
        assert outcome.round_number == 1

    def test_play_shoe(self):
        """Playing out a shoe numbers rounds and ends at the reserve."""
        game = BaccaratGame(seed=42)
        outcomes = game.play_shoe()
        assert len(outcomes) > 50
        assert game.needs_new_shoe()
        assert [o.round_number for o in outcomes] == list(range(1, len(outcomes) + 1))
        with pytest.raises(ShoeExhaustedError):
            game.play_round()

    def test_max_rounds(self):
        """play_shoe stops after max_rounds."""
        game = BaccaratGame(seed=42)
        assert len(game.play_shoe(max_rounds=10)) == 10
        assert game.rounds_played == 10

    def test_same_seed_same_shoe(self):
        """The same seed deals the same shoe."""
        first = BaccaratGame(seed=7).play_shoe()
        second = BaccaratGame(seed=7).play_shoe()
        assert first == second

    def test_every_round_verifies(self):
        """Every dealt round passes verify_round."""
        game = BaccaratGame(seed=11)
        for outcome in game.play_shoe():
            assert verify_round(outcome.player_cards, outcome.banker_cards, outcome.winner)

    def test_roads_match_full_recompute(self):
        """Live roads equal a recompute from the history."""
        game = BaccaratGame(seed=3)
        outcomes = game.play_shoe()
        assert game.roadmap.snapshot() == compute_all(outcomes)

    def test_new_shoe_resets_roads(self):
        """Starting a new shoe starts empty roads."""
        game = BaccaratGame(seed=5)
        game.play_shoe(max_rounds=20)
        game.start_new_shoe(seed=6)
        assert game.rounds_played == 0
        assert game.shoes_played == 2
        assert game.roadmap.snapshot().big_road == ()

    def test_statistics_tracking(self):
        """Test that statistics are tracked correctly."""
        game = BaccaratGame(seed=42)
        game.play_shoe()
        stats = game.get_statistics()
        assert stats.total_rounds == game.rounds_played
        assert stats.player_wins + stats.banker_wins + stats.ties == stats.total_rounds

    def test_tie_rate_approximately_correct(self):
        """Test that tie rate is approximately 9.5% over many shoes."""
        rounds = 0
        ties = 0
        for seed in range(15):
            game = BaccaratGame(seed=seed)
            game.play_shoe()
            stats = game.get_statistics()
            rounds += stats.total_rounds
            ties += stats.ties
        assert 0.05 <= ties / rounds <= 0.15
