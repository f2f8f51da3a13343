import math

import numpy as np
import pytest

from arena.games import Gomoku
from arena.params import MctsParams
from arena.play import ColorPolicy, pit, play_game, self_play
from arena.players import RandomPlayer, random_mcts_player
from arena.replay_buffer import ReplayBuffer
from conftest import FirstMovePlayer, RecordingMemory


def test_play_game_returns_white_reward_and_records_samples(game):
    # First legal move every time: X wins on the anti-diagonal at move 7
    player = FirstMovePlayer(game)
    memory = RecordingMemory()
    z = play_game(player, player, memory)

    assert z == 1.0
    assert memory.terminals == [(1.0, 7)]
    assert [turn for _, _, _, turn in memory.samples] == list(range(7))
    assert [white for _, _, white, _ in memory.samples] == [True, False] * 3 + [True]
    assert all(len(policy) == 9 - turn for _, policy, _, turn in memory.samples)


def test_play_game_without_memory(game):
    assert play_game(FirstMovePlayer(game), FirstMovePlayer(game)) == 1.0


def test_play_game_picks_the_player_by_side_to_move(game):
    white, black = FirstMovePlayer(game, "white"), FirstMovePlayer(game, "black")
    play_game(white, black)
    assert white.games_as_white == 1
    assert black.games_as_white == 0


def test_players_must_play_the_same_game(game):
    with pytest.raises(ValueError):
        play_game(FirstMovePlayer(game), FirstMovePlayer(Gomoku(5, 4)))


@pytest.mark.parametrize("seed", range(10))
def test_random_self_play_terminates(game, seed):
    player = RandomPlayer(game, rng=np.random.default_rng(seed))
    memory = RecordingMemory()
    z = self_play(player, memory)

    assert z in (-1.0, 0.0, 1.0)
    assert len(memory.terminals) == 1
    reward, length = memory.terminals[0]
    assert reward == z
    assert 5 <= length <= 9
    assert len(memory.samples) == length


def test_self_play_fills_replay_buffer(game, rng):
    player = random_mcts_player(game, MctsParams(num_iters_per_turn=10), rng=rng)
    buffer = ReplayBuffer(capacity=1000)
    z = self_play(player, buffer)

    assert buffer.num_games == 1
    assert 5 <= len(buffer) <= 9
    board, policy, value, turns_to_end = list(buffer.buffer)[0]
    assert value == z
    assert turns_to_end == len(buffer)


def collect(results):
    return lambda i, z: results.append((i, z))


def test_alternate_colors(game):
    # White always wins with first-move players, so the contender's reward reveals its color
    baseline, contender = FirstMovePlayer(game, "baseline"), FirstMovePlayer(game, "contender")
    results = []
    score = pit(collect(results), baseline, contender, 5)

    assert results == [(1, -1.0), (2, 1.0), (3, -1.0), (4, 1.0), (5, -1.0)]
    assert baseline.games_as_white == 3 == math.ceil(5 / 2)
    assert contender.games_as_white == 2
    assert score == pytest.approx(-0.2)


@pytest.mark.parametrize("color_policy, expected", [
    (ColorPolicy.BASELINE_WHITE, -1.0),
    (ColorPolicy.CONTENDER_WHITE, 1.0),
])
def test_fixed_colors(game, color_policy, expected):
    baseline, contender = FirstMovePlayer(game, "baseline"), FirstMovePlayer(game, "contender")
    results = []
    score = pit(collect(results), baseline, contender, 4, color_policy=color_policy)

    assert [z for _, z in results] == [expected] * 4
    assert score == expected
    white = baseline if color_policy == ColorPolicy.BASELINE_WHITE else contender
    assert white.games_as_white == 4


def test_reset_cadence(game):
    events = []
    baseline = FirstMovePlayer(game, "baseline", events)
    contender = FirstMovePlayer(game, "contender", events)
    pit(lambda i, z: events.append(("game", i)), baseline, contender, 7, reset_every=3)

    resets_after = []
    last_game = 0
    for kind, value in events:
        if kind == "game":
            last_game = value
        elif value == "baseline":
            resets_after.append(last_game)
    assert resets_after == [3, 6, 7]
    assert events.count(("reset", "contender")) == 3


def test_no_reset_by_default(game):
    events = []
    pit(lambda i, z: None, FirstMovePlayer(game, "b", events), FirstMovePlayer(game, "c", events), 6)
    assert events == []


@pytest.mark.parametrize("kwargs", [{"num_games": 0}, {"num_games": 3, "reset_every": 0}])
def test_pit_rejects_bad_arguments(game, kwargs):
    with pytest.raises(ValueError):
        pit(lambda i, z: None, FirstMovePlayer(game), FirstMovePlayer(game), **kwargs)


class ExplodingPlayer(FirstMovePlayer):
    def decide(self, state, turn):
        if turn >= 2:
            raise ValueError("[Exploding] bad policy")
        return super().decide(state, turn)


def test_failing_game_aborts_the_tournament(game):
    results = []
    with pytest.raises(ValueError):
        pit(collect(results), FirstMovePlayer(game), ExplodingPlayer(game), 10)
    assert results == []


def test_random_players_are_even_with_alternating_colors(game):
    baseline = RandomPlayer(game, rng=np.random.default_rng(7))
    contender = RandomPlayer(game, rng=np.random.default_rng(8))
    results = []
    score = pit(collect(results), baseline, contender, 100, color_policy=ColorPolicy.ALTERNATE_COLORS)

    assert len(results) == 100
    assert all(z in (-1.0, 0.0, 1.0) for _, z in results)
    assert -0.3 <= score <= 0.3


def test_search_beats_random(game):
    rng = np.random.default_rng(11)
    baseline = RandomPlayer(game, rng=rng)
    contender = random_mcts_player(
        game, MctsParams(num_iters_per_turn=200, temperature=0.1, dirichlet_noise_epsilon=0.0), rng=rng
    )
    score = pit(lambda i, z: None, baseline, contender, 20, reset_every=5)
    assert score > 0
