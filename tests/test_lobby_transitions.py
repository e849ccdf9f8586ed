from collections import Counter
from random import Random

import pytest

from engine.deck import build_deck
from engine.errors import (
    AlreadyStarted,
    MatchOver,
    MissingPlayerName,
    NameTaken,
    NotEnoughPlayers,
    RoomFull,
)
from engine.game import create_session, join, start
from engine.rules_schema import RuleSet
from engine.state import Phase


def lobby(*names, max_players=4):
    session = create_session("ROOM0001", max_players, names[0])
    for name in names[1:]:
        session = join(session, name)
    return session


def all_cards(session):
    cards = list(session.deck) + list(session.discard_pile)
    for player in session.players:
        cards.extend(player.hand)
    return cards


def test_create_session_seats_host():
    session = create_session("ROOM0001", 4, "Ann")

    assert session.player_names() == ["Ann"]
    assert not session.started
    assert session.phase is Phase.LOBBY
    assert session.scores == {}
    assert session.deck == [] and session.discard_pile == []


def test_create_session_requires_host_name():
    with pytest.raises(MissingPlayerName):
        create_session("ROOM0001", 4, "")


def test_join_appends_in_order_without_touching_input():
    session = lobby("Ann")
    joined = join(session, "Bob")

    assert joined.player_names() == ["Ann", "Bob"]
    assert joined.players[1].hand == []
    assert session.player_names() == ["Ann"]


def test_join_rejects_duplicate_name():
    with pytest.raises(NameTaken):
        join(lobby("Ann", "Bob"), "Bob")


def test_join_rejects_blank_name():
    with pytest.raises(MissingPlayerName):
        join(lobby("Ann"), "   ")


def test_join_rejected_once_started():
    session = start(lobby("Ann", "Bob"), rng=Random(1))
    with pytest.raises(AlreadyStarted):
        join(session, "Cy")


def test_max_players_is_informational_by_default():
    session = lobby("Ann", "Bob", max_players=2)
    assert join(session, "Cy").player_names() == ["Ann", "Bob", "Cy"]


def test_max_players_enforced_when_configured():
    session = lobby("Ann", "Bob", max_players=2)
    with pytest.raises(RoomFull):
        join(session, "Cy", rules=RuleSet(enforce_max_players=True))


def test_start_requires_two_players():
    with pytest.raises(NotEnoughPlayers):
        start(lobby("Ann"))


def test_start_deals_seven_each_and_opens_discard():
    session = start(lobby("Ann", "Bob", "Cy"), rng=Random(5))

    assert session.started
    assert session.phase is Phase.IN_ROUND
    assert [len(player.hand) for player in session.players] == [7, 7, 7]
    assert len(session.discard_pile) == 1
    assert len(session.deck) == 86
    assert session.current_player in session.player_names()
    assert Counter(all_cards(session)) == Counter(build_deck())


def test_start_twice_is_rejected():
    session = start(lobby("Ann", "Bob"), rng=Random(5))
    with pytest.raises(AlreadyStarted):
        start(session)


def test_start_leaves_lobby_untouched():
    session = lobby("Ann", "Bob")
    start(session, rng=Random(5))

    assert not session.started
    assert all(player.hand == [] for player in session.players)


def test_start_is_reproducible_with_seed():
    first = start(lobby("Ann", "Bob"), rng=Random(9))
    second = start(lobby("Ann", "Bob"), rng=Random(9))
    assert first == second


def test_start_uses_configured_hand_size():
    session = start(lobby("Ann", "Bob"), rng=Random(5), rules=RuleSet(hand_size=5))
    assert [len(player.hand) for player in session.players] == [5, 5]
    assert len(session.deck) == 108 - 11


def test_start_rejected_after_match_over():
    session = lobby("Ann", "Bob")
    session.overall_winner = "Ann"
    session.scores = {"Ann": 12, "Bob": 510}

    assert session.phase is Phase.MATCH_OVER
    with pytest.raises(MatchOver):
        start(session)


def test_player_count_is_checked_before_started_flag():
    session = lobby("Ann")
    session.started = True

    with pytest.raises(NotEnoughPlayers):
        start(session)
