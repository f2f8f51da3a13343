import numpy as np
import pytest

from arena.games import TicTacToe
from arena.players import Player


@pytest.fixture
def game():
    return TicTacToe()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


class FirstMovePlayer(Player):
    """
    Always plays the first legal action. Logs its resets into `events`.
    """
    def __init__(self, game, name="player", events=None):
        super().__init__(game)
        self.name = name
        self.events = events if events is not None else []
        self.games_as_white = 0

    def decide(self, state, turn):
        actions = self.game.legal_actions(state)
        if turn == 0:
            self.games_as_white += 1
        return actions[0], np.full(len(actions), 1.0 / len(actions), dtype=np.float32)

    def reset_state(self):
        self.events.append(("reset", self.name))


class RecordingMemory:
    def __init__(self):
        self.samples = []
        self.terminals = []

    def record_sample(self, board, policy, white_to_move, turn):
        self.samples.append((board, policy, white_to_move, turn))

    def record_terminal(self, reward, game_length):
        self.terminals.append((reward, game_length))
