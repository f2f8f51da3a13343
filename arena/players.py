#!/usr/bin/env python3
"""
Filename: players.py
Author: Vojtěch Havlíček
Created: 2025-08-02
Description: Players: turn a position into a move (and the distribution it came from).
License: MIT
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from arena.constants import PROB_TOLERANCE
from arena.controller import NeuralNetworkController
from arena.games import Game
from arena.mcts import MCTS, RandomOracle
from arena.params import MctsParams
from arena.schedule import StepSchedule

logger = logging.getLogger(__name__)


def fix_probvec(weights) -> np.ndarray:
    """
    Turns a vector of non-negative weights into a probability vector (float32).

    - sums to 1 (within PROB_TOLERANCE): returned as is
    - sums to 0: uniform distribution
    - otherwise: divided by its sum

    Raises:
        ValueError: on empty, non 1-D, negative or non-finite input.
    """
    probs = np.asarray(weights, dtype=np.float64)
    if probs.ndim != 1 or probs.size == 0:
        raise ValueError(f"[fix_probvec] Expected a non-empty 1-D vector, got shape {probs.shape}")
    if not np.all(np.isfinite(probs)):
        raise ValueError(f"[fix_probvec] Non-finite weights: {probs}")
    if np.any(probs < 0):
        raise ValueError(f"[fix_probvec] Negative weights: {probs}")

    total = float(np.sum(probs))
    if abs(total - 1.0) <= PROB_TOLERANCE:
        return probs.astype(np.float32)
    if total == 0.0:
        return np.full(probs.size, 1.0 / probs.size, dtype=np.float32)
    if not np.isfinite(total):
        # Sum overflows float64: rescale by the largest weight first
        probs = probs / probs.max()
        total = float(np.sum(probs))
    return (probs / total).astype(np.float32)


class Player(ABC):
    """
    A player is bound to the rules engine it plays (`self.game`).
    """
    def __init__(self, game: Game, rng=None):
        self.game = game
        self.rng = rng if rng is not None else np.random.default_rng()

    @abstractmethod
    def decide(self, state, turn: int):
        """
        Returns an (action, policy) pair, where `action` is a legal action
        and `policy` a probability distribution over the legal actions.

        NOTE: `action` does not have to be drawn from `policy`.
        """

    def reset_state(self) -> None:
        """Forget everything cached during previous games."""


class RandomPlayer(Player):
    """
    Plays uniformly at random.
    """

    def decide(self, state, turn):
        actions = self.game.legal_actions(state)
        n = len(actions)
        if n == 0:
            raise ValueError("[RandomPlayer] No legal actions")
        policy = np.full(n, 1.0 / n, dtype=np.float32)
        return actions[self.rng.integers(n)], policy


class MctsPlayer(Player):
    """
    Player driven by a tree search (or directly by its oracle when
    num_iters_per_turn is 0).

    Args:
        mcts: search engine, owned by this player
        num_iters_per_turn: simulations per move
        temperature: turn -> temperature of the search policy
        nalpha: Dirichlet concentration (divided by the number of actions)
        epsilon: weight of the Dirichlet noise, 0 disables it
    """
    def __init__(self,
                 mcts: MCTS,
                 num_iters_per_turn: int,
                 temperature: StepSchedule,
                 nalpha: float,
                 epsilon: float,
                 rng=None):
        super().__init__(mcts.game, rng=rng)
        self.mcts = mcts
        self.num_iters_per_turn = num_iters_per_turn
        self.temperature = temperature
        self.nalpha = nalpha
        self.epsilon = epsilon

    @classmethod
    def from_oracle(cls, game: Game, oracle, params: MctsParams, rng=None) -> "MctsPlayer":
        """
        Builds a player around its own MCTS over `oracle`. A network oracle is
        copied onto `params.device` in test mode first.
        """
        if isinstance(oracle, NeuralNetworkController):
            oracle = oracle.copy(device=params.device, test_mode=True)
        mcts = MCTS(game, oracle, cpuct=params.cpuct)
        return cls(mcts,
                   params.num_iters_per_turn,
                   temperature=params.temperature,
                   nalpha=params.dirichlet_noise_nalpha,
                   epsilon=params.dirichlet_noise_epsilon,
                   rng=rng)

    def decide(self, state, turn):
        if self.num_iters_per_turn == 0:
            # Special case: use the oracle directly instead of MCTS
            actions = self.game.legal_actions(state)
            board = self.game.canonical_board(state)
            pi_mcts, _ = self.mcts.oracle.evaluate(board, actions)
        else:
            self.mcts.explore(state, self.num_iters_per_turn)
            actions, pi_mcts = self.mcts.policy(state, temperature=self.temperature[turn])

        pi_mcts = np.asarray(pi_mcts, dtype=np.float32)
        if len(actions) == 0:
            raise ValueError("[MctsPlayer] Empty policy")
        if len(pi_mcts) != len(actions):
            raise ValueError(
                f"[MctsPlayer] Policy has {len(pi_mcts)} entries for {len(actions)} actions"
            )

        if self.epsilon == 0:
            pi_exp = pi_mcts
        else:
            n = len(pi_mcts)
            noise = self.rng.dirichlet(np.full(n, self.nalpha / n))
            pi_exp = (1 - self.epsilon) * pi_mcts + self.epsilon * noise

        idx = self.rng.choice(len(actions), p=fix_probvec(pi_exp))
        return actions[idx], pi_mcts

    def reset_state(self):
        logger.debug("[MctsPlayer] Resetting search tree")
        self.mcts.reset()


def random_mcts_player(game: Game, params: MctsParams, rng=None) -> MctsPlayer:
    """MCTS player whose oracle is uniform, i.e. plain tree search with no learned prior."""
    return MctsPlayer.from_oracle(game, RandomOracle(), params, rng=rng)
