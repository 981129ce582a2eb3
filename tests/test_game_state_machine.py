import logging

import pytest

from GameControl import Choice, GameState, GameStateMachine, MemorySettingsStore, Outcome


def _play_to_score(game, wins):
    """Win ``wins`` rounds in a row, leaving the game in RESULT."""
    for i in range(wins):
        if i:
            assert game.next_round()
        assert game.choose(Choice.ROCK)
    return game


def test_new_game_loads_high_score():
    store = MemorySettingsStore({"highScore": 7})
    game = GameStateMachine(store=store)

    assert game.state is GameState.SELECTING
    assert game.high_score == 7
    assert game.player_score == 0
    assert game.opponent_score == 0
    assert game.player_choice is None
    assert game.opponent_choice is None
    assert game.outcome is None
    assert game.result_visible is False
    assert game.round == 1


def test_new_game_with_empty_store_starts_at_zero():
    game = GameStateMachine()
    assert game.high_score == 0


def test_choose_win_increments_player_score(make_game):
    game = make_game(Choice.SCISSORS)

    assert game.choose(Choice.ROCK) is True

    assert game.state is GameState.RESULT
    assert game.result_visible is True
    assert game.player_choice is Choice.ROCK
    assert game.opponent_choice is Choice.SCISSORS
    assert game.outcome is Outcome.WIN
    assert game.player_score == 1
    assert game.opponent_score == 0


def test_choose_draw_leaves_scores(make_game):
    game = make_game(Choice.PAPER)

    game.choose(Choice.PAPER)

    assert game.outcome is Outcome.DRAW
    assert game.player_score == 0
    assert game.opponent_score == 0


def test_choose_lose_increments_opponent_score(make_game):
    game = make_game(Choice.ROCK)

    game.choose(Choice.SCISSORS)

    assert game.outcome is Outcome.LOSE
    assert game.player_score == 0
    assert game.opponent_score == 1


def test_choose_draws_opponent_from_all_choices(fixed_choice):
    rng = fixed_choice(Choice.PAPER)
    game = GameStateMachine(rng=rng)

    game.choose(Choice.ROCK)

    assert rng.calls == 1


def test_choose_in_result_is_ignored(make_game):
    game = make_game(Choice.SCISSORS, Choice.PAPER)
    game.choose(Choice.ROCK)

    assert game.choose(Choice.SCISSORS) is False

    assert game.player_choice is Choice.ROCK
    assert game.opponent_choice is Choice.SCISSORS
    assert game.player_score == 1
    assert game.opponent_score == 0
    assert game.state is GameState.RESULT


def test_next_round_clears_choices_and_keeps_scores(make_game):
    game = make_game(Choice.SCISSORS, Choice.PAPER)
    game.choose(Choice.ROCK)
    game.next_round()
    game.choose(Choice.ROCK)

    assert (game.player_score, game.opponent_score) == (1, 1)
    assert game.next_round() is True

    assert game.state is GameState.SELECTING
    assert game.player_choice is None
    assert game.opponent_choice is None
    assert game.outcome is None
    assert (game.player_score, game.opponent_score) == (1, 1)
    assert game.round == 3


def test_next_round_while_selecting_is_ignored(make_game):
    game = make_game()
    assert game.next_round() is False
    assert game.round == 1
    assert game.state is GameState.SELECTING


def test_reset_match_stores_new_high_score(make_game):
    game = make_game(Choice.SCISSORS, high_score=2)
    _play_to_score(game, 5)
    assert game.player_score == 5

    assert game.reset_match() is True

    assert game.high_score == 5
    assert game.store.get_int("highScore") == 5
    assert game.player_score == 0
    assert game.opponent_score == 0
    assert game.state is GameState.SELECTING
    assert game.player_choice is None
    assert game.opponent_choice is None
    assert game.round == 1


def test_reset_match_keeps_better_high_score(make_game):
    game = make_game(Choice.SCISSORS, high_score=3)
    _play_to_score(game, 1)

    game.reset_match()

    assert game.high_score == 3
    assert game.store.get_int("highScore") == 3
    assert game.player_score == 0


def test_reset_match_with_equal_score_does_not_write():
    class RecordingStore(MemorySettingsStore):
        writes = 0

        def set_int(self, key, value):
            self.writes += 1
            super().set_int(key, value)

    store = RecordingStore({"highScore": 1})
    game = GameStateMachine(store=store, rng=_always(Choice.SCISSORS))
    game.choose(Choice.ROCK)

    game.reset_match()

    assert store.writes == 0
    assert game.high_score == 1


def test_reset_match_while_selecting_is_ignored(make_game):
    game = make_game(high_score=4)
    assert game.reset_match() is False
    assert game.high_score == 4


def test_reset_match_write_failure_leaves_session(make_game):
    class BrokenStore(MemorySettingsStore):
        def set_int(self, key, value):
            raise OSError("disk full")

    game = GameStateMachine(store=BrokenStore(), rng=_always(Choice.SCISSORS))
    game.choose(Choice.ROCK)

    with pytest.raises(OSError):
        game.reset_match()

    assert game.high_score == 0
    assert game.player_score == 1
    assert game.state is GameState.RESULT


def test_high_score_key_is_configurable():
    store = MemorySettingsStore({"best": 9})
    game = GameStateMachine(store=store, high_score_key="best")
    assert game.high_score == 9


def test_subscribers_notified_on_applied_transitions_only(make_game):
    game = make_game(Choice.SCISSORS)
    seen = []
    unsubscribe = game.subscribe(lambda g: seen.append(g.state))

    game.next_round()  # ignored
    game.choose(Choice.ROCK)
    game.choose(Choice.ROCK)  # ignored
    game.next_round()
    assert seen == [GameState.RESULT, GameState.SELECTING]

    unsubscribe()
    game.choose(Choice.ROCK)
    assert len(seen) == 2


def test_failing_subscriber_does_not_block_others(make_game, caplog):
    game = make_game(Choice.SCISSORS)
    seen = []

    def broken(_game):
        raise RuntimeError("boom")

    game.subscribe(broken)
    game.subscribe(lambda g: seen.append(g.player_score))

    with caplog.at_level(logging.ERROR):
        assert game.choose(Choice.ROCK) is True

    assert seen == [1]
    assert "listener" in caplog.text


def test_to_dict_in_result(make_game):
    game = make_game(Choice.ROCK)
    game.choose(Choice.SCISSORS)

    assert game.to_dict() == {
        "state": "RESULT",
        "view": "result",
        "round": 1,
        "player_score": 0,
        "opponent_score": 1,
        "high_score": 0,
        "player_choice": "scissors",
        "opponent_choice": "rock",
        "outcome": "LOSE",
        "message": "You Lost!",
        "result_visible": True,
    }


def test_to_dict_while_selecting(make_game):
    data = make_game().to_dict()
    assert data["state"] == "SELECTING"
    assert data["view"] == "selection"
    assert data["player_choice"] is None
    assert data["outcome"] is None
    assert data["message"] is None


def test_seeded_random_source_is_reproducible():
    import random

    def opponents(seed):
        game = GameStateMachine(rng=random.Random(seed))
        picks = []
        for _ in range(10):
            game.choose(Choice.ROCK)
            picks.append(game.opponent_choice)
            game.next_round()
        return picks

    assert opponents(42) == opponents(42)
    assert set(opponents(42)) <= set(Choice)


def _always(choice):
    class _Rng:
        def choice(self, seq):
            return choice

    return _Rng()


def test_choose_accepts_tags(make_game):
    from GameControl import InvalidChoice

    game = make_game(Choice.ROCK)
    with pytest.raises(InvalidChoice):
        game.choose("lizard")
    assert game.state is GameState.SELECTING

    assert game.choose("Paper") is True
    assert game.player_choice is Choice.PAPER
    assert game.outcome is Outcome.WIN


def test_ignored_choose_logs_choice_tag(make_game, caplog):
    game = make_game(Choice.SCISSORS)
    game.choose(Choice.ROCK)

    with caplog.at_level(logging.DEBUG, logger="GameControl"):
        assert game.choose(Choice.PAPER) is False

    assert "Ignoring choose(paper) in RESULT" in caplog.text
    assert "Choice." not in caplog.text
