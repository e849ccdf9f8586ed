from copy import deepcopy

import pytest

from engine.cards import parse_card, parse_cards
from engine.errors import CardNotHeld, EmptyDrawPile, IllegalCard, InvalidCard, NotStarted, NotYourTurn
from engine.game import draw, play
from engine.rules_schema import RuleSet
from engine.state import Player, Session


def in_round(hands, *, top="Red 2", deck=(), current="A", scores=None):
    return Session(
        code="ROOM0001",
        max_players=4,
        players=[Player(name=name, hand=parse_cards(cards)) for name, cards in hands],
        started=True,
        deck=parse_cards(deck),
        discard_pile=[parse_card(top)],
        current_player=current,
        scores=dict(scores or {}),
    )


def test_play_moves_card_and_advances_turn():
    session = in_round([("A", ["Red 5", "Blue 9"]), ("B", ["Green 1"]), ("C", ["Green 2"])])
    updated = play(session, "A", parse_card("Red 5"))

    assert updated.find_player("A").hand == parse_cards(["Blue 9"])
    assert updated.discard_top() == parse_card("Red 5")
    assert updated.current_player == "B"
    assert updated.started


def test_play_wraps_around_to_first_player():
    session = in_round([("A", ["Red 1"]), ("B", ["Green 1"]), ("C", ["Red 5", "Blue 9"])], current="C")
    updated = play(session, "C", parse_card("Red 5"))
    assert updated.current_player == "A"


def test_play_removes_only_one_copy():
    session = in_round([("A", ["Red 5", "Red 5", "Blue 9"]), ("B", ["Green 1"])])
    updated = play(session, "A", parse_card("Red 5"))
    assert updated.find_player("A").hand == parse_cards(["Red 5", "Blue 9"])


def test_special_cards_have_no_turn_effect():
    session = in_round([("A", ["Red Skip", "Blue 9"]), ("B", ["Green 1"]), ("C", ["Green 2"])])
    updated = play(session, "A", parse_card("Red Skip"))
    assert updated.current_player == "B"


def test_play_rejections():
    session = in_round([("A", ["Red 5", "Blue 9"]), ("B", ["Green 1"])])

    with pytest.raises(NotYourTurn):
        play(session, "B", parse_card("Green 1"))
    with pytest.raises(IllegalCard):
        play(session, "A", parse_card("Blue 9"))
    with pytest.raises(CardNotHeld):
        play(session, "A", parse_card("Red 7"))


def test_illegal_card_is_checked_before_possession():
    session = in_round([("A", ["Red 5"]), ("B", ["Green 1"])])
    with pytest.raises(IllegalCard):
        play(session, "A", parse_card("Blue 8"))


def test_play_and_draw_need_a_started_round():
    session = in_round([("A", ["Red 5"]), ("B", ["Green 1"])])
    session.started = False

    with pytest.raises(NotStarted):
        play(session, "A", parse_card("Red 5"))
    with pytest.raises(NotStarted):
        draw(session, "A")


def test_failed_transition_leaves_session_identical():
    session = in_round([("A", ["Red 5", "Blue 9"]), ("B", ["Green 1"])], deck=["Blue 1"])
    snapshot = deepcopy(session)

    for attempt in (
        lambda: play(session, "A", parse_card("Blue 9")),
        lambda: play(session, "A", parse_card("Red 7")),
        lambda: play(session, "B", parse_card("Green 1")),
        lambda: draw(session, "B"),
    ):
        with pytest.raises(Exception):
            attempt()
        assert session == snapshot


def test_emptying_hand_ends_round_and_scores_everyone():
    session = in_round(
        [
            ("A", ["Red 5"]),
            ("B", ["Blue 7", "Wild", "Green Skip"]),
            ("C", ["Yellow 0", "Red Draw Two"]),
        ],
        scores={"A": 10, "B": 100},
    )
    updated = play(session, "A", parse_card("Red 5"))

    assert not updated.started
    assert updated.winner == "A"
    assert updated.scores == {"A": 10, "B": 177, "C": 20}
    assert updated.overall_winner is None


def test_reaching_threshold_picks_lowest_total():
    session = in_round(
        [("A", ["Red 5"]), ("B", ["Wild", "Red 9"]), ("C", ["Blue 1"])],
        scores={"A": 60, "B": 445, "C": 30},
    )
    updated = play(session, "A", parse_card("Red 5"))

    assert updated.scores == {"A": 60, "B": 504, "C": 31}
    assert updated.overall_winner == "C"


def test_threshold_not_reached_at_499():
    session = in_round([("A", ["Red 5"]), ("B", ["Blue 9"])], scores={"B": 490})
    updated = play(session, "A", parse_card("Red 5"))

    assert updated.scores["B"] == 499
    assert updated.overall_winner is None


def test_custom_match_threshold():
    session = in_round([("A", ["Red 5"]), ("B", ["Blue 9"])])
    updated = play(session, "A", parse_card("Red 5"), rules=RuleSet(match_threshold=5))
    assert updated.overall_winner == "A"


def test_draw_legal_card_keeps_turn():
    session = in_round([("A", ["Blue 9"]), ("B", ["Green 1"])], deck=["Green 4", "Red 8"])
    updated = draw(session, "A")

    assert updated.find_player("A").hand == parse_cards(["Blue 9", "Red 8"])
    assert updated.deck == parse_cards(["Green 4"])
    assert updated.current_player == "A"
    assert updated.discard_pile == parse_cards(["Red 2"])


def test_draw_illegal_card_is_discarded_and_turn_passes():
    session = in_round([("A", ["Blue 9"]), ("B", ["Green 1"])], deck=["Green 4", "Blue 8"])
    updated = draw(session, "A")

    assert updated.find_player("A").hand == parse_cards(["Blue 9"])
    assert updated.discard_pile == parse_cards(["Red 2", "Blue 8"])
    assert updated.current_player == "B"


def test_draw_from_empty_pile_fails():
    session = in_round([("A", ["Blue 9"]), ("B", ["Green 1"])])
    with pytest.raises(EmptyDrawPile):
        draw(session, "A")


def test_draw_out_of_turn_fails():
    session = in_round([("A", ["Blue 9"]), ("B", ["Green 1"])], deck=["Red 8"])
    with pytest.raises(NotYourTurn):
        draw(session, "B")


def test_wire_face_is_parsed_after_turn_checks():
    session = in_round([("A", ["Red 5", "Blue 9"]), ("B", ["Green 1"])])

    with pytest.raises(NotYourTurn):
        play(session, "B", "Purple 5")
    with pytest.raises(InvalidCard):
        play(session, "A", "Purple 5")
    assert play(session, "A", "Red 5").discard_top() == parse_card("Red 5")
