#!/usr/bin/env python3
"""
Filename: mcts.py
Author: Vojtěch Havlíček
Created: 2025-07-11
Description: Monte Carlo Tree Search (MCTS) used by the search-based players.
License: MIT
"""

from abc import ABC, abstractmethod

import numpy as np

from arena.constants import CPUCT, MIN_TEMPERATURE
from arena.games import Game


class Oracle(ABC):
    """
    Maps a canonical board and the list of legal actions to
    (prior distribution aligned with `actions`, value for the side to move).
    """

    @abstractmethod
    def evaluate(self, board, actions) -> tuple[np.ndarray, float]:
        ...


class RandomOracle(Oracle):
    """
    Uniform prior, zero value. Turns MCTS into plain UCT-style search.
    """

    def evaluate(self, board, actions):
        n = len(actions)
        return np.full(n, 1.0 / n, dtype=np.float32), 0.0


class StateInfo:
    """
    Statistics of one position in the search tree.
    """
    def __init__(self, actions, prior):
        self.actions = actions
        self.P = np.asarray(prior, dtype=np.float64)  # Prior of each action
        self.N = np.zeros(len(actions), dtype=np.int64)  # Visit counts
        self.W = np.zeros(len(actions), dtype=np.float64)  # Total value

    @property
    def Ntot(self) -> int:
        return int(self.N.sum())


class MCTS:
    """
    PUCT search. Statistics are stored per position and survive between
    calls to `explore`, so consecutive moves of a game (and consecutive
    games) reuse the tree until `reset` is called.

    Not safe to share between concurrently running games.
    """
    def __init__(self,
                 game: Game,
                 oracle: Oracle,
                 cpuct=CPUCT):
        self.game = game
        self.oracle = oracle
        self.cpuct = cpuct
        self.tree = {}  # state_key -> StateInfo

    def explore(self, state, iterations: int) -> None:
        """
        Runs `iterations` simulations starting from `state`. `state` is not modified.
        """
        for _ in range(iterations):
            self._simulate(self.game.clone(state))

    def policy(self, state, temperature: float):
        """
        Returns (actions, distribution) from the root visit counts.

        Low temperature -> sharper distribution, at or below MIN_TEMPERATURE -> argmax.
        """
        info = self.tree.get(self.game.state_key(state))
        if info is None:
            raise ValueError("[MCTS] Policy requested for a state that was never explored")
        if len(info.actions) == 0:
            raise ValueError("[MCTS] Empty policy: the state has no legal actions")

        counts = info.N.astype(np.float64)
        if temperature <= MIN_TEMPERATURE:
            probs = np.zeros_like(counts)
            probs[np.argmax(counts)] = 1.0
            return info.actions, probs

        # Zero visits -> uniform distribution
        if counts.max() <= 0:
            return info.actions, np.ones_like(counts) / len(counts)
        counts = (counts / counts.max()) ** (1.0 / temperature)
        return info.actions, counts / counts.sum()

    def reset(self) -> None:
        self.tree = {}

    def _simulate(self, state) -> float:
        """
        One simulation from `state` (consumed). Returns the value for the side to move in `state`.
        """
        game = self.game
        reward = game.terminal_reward(state)
        white = game.is_white_to_move(state)
        if reward is not None:
            return reward if white else -reward

        key = game.state_key(state)
        info = self.tree.get(key)
        if info is None:
            # Leaf: expand with the oracle and return its estimate
            actions = game.legal_actions(state)
            prior, value = self.oracle.evaluate(game.canonical_board(state), actions)
            if len(prior) != len(actions):
                raise ValueError(
                    f"[MCTS] Oracle returned {len(prior)} probabilities for {len(actions)} actions"
                )
            self.tree[key] = StateInfo(actions, prior)
            return float(value)

        idx = self._select(info)
        game.apply_action(state, info.actions[idx])
        same_side = game.is_white_to_move(state) == white
        child_value = self._simulate(state)
        value = child_value if same_side else -child_value

        info.N[idx] += 1
        info.W[idx] += value
        return value

    def _select(self, info: StateInfo) -> int:
        """Index of the action maximizing Q + U (PUCT)."""
        Q = np.divide(info.W, info.N, out=np.zeros_like(info.W), where=info.N > 0)
        U = self.cpuct * info.P * np.sqrt(info.Ntot + 1e-8) / (1 + info.N)
        return int(np.argmax(Q + U))
