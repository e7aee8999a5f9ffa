"""
Test flip, match resolution, mismatch reversal and reset on the game engine
"""
import random
from collections import Counter

import pytest

from memory_core.data_models import BACK_DESIGN
from memory_core.deck import DeckError, build_deck, deck_from_fronts
from memory_core.game_state import GameState

# Cards 0 and 5 share "A"; card 1 is "B"
FRONTS = ["A", "B", "C", "D", "E", "A", "B", "C",
          "D", "E", "F", "F", "G", "G", "H", "H"]


@pytest.fixture
def game(scheduler):
    return GameState(scheduler, cards=deck_from_fronts(FRONTS))


@pytest.fixture
def notifications(game):
    calls = []
    game.add_listener(lambda: calls.append(game.revealed_indices))
    return calls


def test_deck_pairs_every_label():
    for seed in range(20):
        deck = build_deck(rng=random.Random(seed))
        counts = Counter(card.front for card in deck)
        assert len(deck) == 16
        assert len(counts) == 8
        assert set(counts.values()) == {2}
        assert all(card.back == BACK_DESIGN and not card.revealed for card in deck)


def test_deck_rejects_bad_sizes():
    with pytest.raises(DeckError):
        build_deck(size=15)
    with pytest.raises(DeckError):
        build_deck(size=0)
    with pytest.raises(DeckError):
        build_deck(size=20)
    with pytest.raises(DeckError):
        deck_from_fronts(["A", "A", "B"])


def test_deck_uses_first_distinct_labels():
    deck = build_deck(size=4, labels=["X", "X", "Y", "Z"], rng=random.Random(1))
    assert sorted(card.front for card in deck) == ["X", "X", "Y", "Y"]


def test_first_flip_reveals_and_notifies(game, notifications):
    assert game.flip(0) is True
    assert game.cards[0].revealed
    assert game.revealed_indices == (0,)
    assert notifications == [(0,)]


def test_matching_pair_stays_revealed(game, notifications, scheduler):
    game.flip(0)
    game.flip(5)

    assert game.cards[0].revealed and game.cards[5].revealed
    assert game.revealed_indices == ()
    assert game.matched_pairs == 1
    assert game.moves == 1
    assert not game.is_locked
    # flip, flip, match resolution
    assert len(notifications) == 3
    assert scheduler.pending == []


def test_mismatch_reverts_after_delay(game, notifications, scheduler):
    game.flip(0)
    game.flip(1)

    assert game.revealed_indices == (0, 1)
    assert game.is_locked
    assert game.has_pending_reversal
    assert len(notifications) == 2

    scheduler.advance(999)
    assert game.cards[0].revealed and game.cards[1].revealed
    assert game.revealed_indices == (0, 1)

    scheduler.advance(1)
    assert not game.cards[0].revealed
    assert not game.cards[1].revealed
    assert game.revealed_indices == ()
    assert not game.has_pending_reversal
    assert game.moves == 1
    assert game.matched_pairs == 0
    assert len(notifications) == 3


def test_custom_mismatch_delay(scheduler):
    game = GameState(scheduler, cards=deck_from_fronts(FRONTS), mismatch_delay_ms=250)
    game.flip(0)
    game.flip(1)
    scheduler.advance(250)
    assert game.revealed_indices == ()


@pytest.mark.parametrize("index", [-1, 16, 100])
def test_out_of_range_flip_is_ignored(game, notifications, index):
    assert game.flip(index) is False
    assert notifications == []
    assert game.revealed_indices == ()


def test_flip_of_revealed_card_is_ignored(game, notifications):
    game.flip(0)
    assert game.flip(0) is False
    assert game.revealed_indices == (0,)
    assert len(notifications) == 1


def test_flip_blocked_while_pair_pending(game, notifications, scheduler):
    game.flip(0)
    game.flip(1)
    before = [card.revealed for card in game.cards]

    assert game.flip(2) is False
    assert [card.revealed for card in game.cards] == before
    assert len(notifications) == 2

    scheduler.advance(1000)
    assert game.flip(2) is True


def test_matched_cards_cannot_be_flipped_again(game, notifications):
    game.flip(0)
    game.flip(5)
    count = len(notifications)

    assert game.flip(0) is False
    assert game.flip(5) is False
    assert len(notifications) == count


def test_reset_hides_everything(game, notifications):
    game.flip(0)
    game.flip(5)
    game.flip(1)

    game.reset()

    assert all(not card.revealed for card in game.cards)
    assert game.revealed_indices == ()
    assert game.matched_pairs == 0
    assert game.moves == 0
    assert notifications[-1] == ()


def test_reset_keeps_deck_order_by_default(game):
    game.reset()
    assert [card.front for card in game.cards] == FRONTS


def test_reset_mid_delay_cancels_reversal(game, scheduler):
    game.flip(0)
    game.flip(1)

    game.reset()
    assert scheduler.pending == []
    assert not game.is_locked

    game.flip(0)
    game.flip(5)
    scheduler.advance(1000)
    assert game.cards[0].revealed and game.cards[5].revealed


def test_stale_reversal_is_dropped_after_reset(leaky_scheduler):
    game = GameState(leaky_scheduler, cards=deck_from_fronts(FRONTS))
    calls = []
    game.add_listener(lambda: calls.append(1))

    game.flip(0)
    game.flip(1)
    game.reset()
    game.flip(1)

    leaky_scheduler.advance(1000)

    assert game.cards[1].revealed
    assert game.revealed_indices == (1,)
    # flip, flip, reset, flip; the stale reversal notifies nobody
    assert len(calls) == 4


def test_reset_with_reshuffle_keeps_pairs(scheduler):
    game = GameState(scheduler, cards=deck_from_fronts(FRONTS), rng=random.Random(7))
    game.flip(0)
    game.reset(reshuffle=True)

    fronts = [card.front for card in game.cards]
    assert Counter(fronts) == Counter(FRONTS)
    assert all(not card.revealed for card in game.cards)


def test_reshuffle_on_reset_setting(scheduler):
    rng = random.Random(3)
    game = GameState(scheduler, cards=deck_from_fronts(FRONTS), reshuffle_on_reset=True, rng=rng)
    original = game.cards

    game.reset()

    assert all(a is not b for a, b in zip(original, game.cards))
    assert Counter(card.front for card in game.cards) == Counter(FRONTS)


def test_completing_the_board(game):
    positions = {}
    for index, front in enumerate(FRONTS):
        positions.setdefault(front, []).append(index)

    for first, second in positions.values():
        game.flip(first)
        game.flip(second)

    assert game.is_complete
    assert game.matched_pairs == 8
    assert game.moves == 8


def test_listener_errors_do_not_break_flip(game):
    def broken():
        raise RuntimeError("boom")

    seen = []
    game.add_listener(broken)
    game.add_listener(lambda: seen.append(True))

    assert game.flip(0) is True
    assert seen == [True]


def test_remove_listener(game):
    calls = []

    def listener():
        calls.append(1)

    game.add_listener(listener)
    game.add_listener(listener)
    game.flip(0)
    game.remove_listener(listener)
    game.flip(1)

    assert calls == [1]


def test_state_summary(game):
    game.flip(0)
    game.flip(1)
    summary = game.get_state_summary()
    assert summary['revealed'] == [0, 1]
    assert summary['locked'] is True
    assert summary['pending_reversal'] is True
    assert summary['moves'] == 1
    assert summary['complete'] is False


def test_default_deck_is_dealt(scheduler):
    game = GameState(scheduler, rng=random.Random(0))
    assert game.size == 16
    assert Counter(Counter(card.front for card in game.cards).values()) == {2: 8}


def test_flip_from_listener_resolves_pair_once(game, scheduler):
    def flip_second():
        if game.revealed_indices == (0,):
            game.flip(1)

    game.add_listener(flip_second)
    game.flip(0)

    assert game.moves == 1
    assert len(scheduler.timers) == 1
    assert game.revealed_indices == (0, 1)

    game.reset()
    assert scheduler.pending == []


def test_reset_from_listener_skips_resolution(game, scheduler):
    def reset_on_pair():
        if len(game.revealed_indices) == 2:
            game.reset()

    game.add_listener(reset_on_pair)
    game.flip(0)
    game.flip(1)

    assert game.moves == 0
    assert scheduler.timers == []
    assert game.revealed_indices == ()
