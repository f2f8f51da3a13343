#!/usr/bin/env python3
"""
Filename: play.py
Author: Vojtěch Havlíček
Created: 2025-08-02
Description: Playing games between players: single games, self-play and tournaments (pit).
License: MIT
"""

import logging
from collections.abc import Callable
from enum import Enum

from arena.players import Player

logger = logging.getLogger(__name__)


def play_game(white: Player, black: Player, memory=None) -> float:
    """
    Plays one game and returns the final reward from white's perspective.

    The rules engine is taken from the players. If `memory` is given, every
    move is recorded with `memory.record_sample(board, policy, white_to_move, turn)`
    and the outcome with `memory.record_terminal(reward, game_length)`.

    NOTE: relies on the rules engine to end the game.
    """
    game = white.game
    if black.game != game:
        raise ValueError(f"[play_game] Players play different games: {white.game} vs {black.game}")

    state = game.initial_state()
    num_turns = 0
    while True:
        z = game.terminal_reward(state)
        if z is not None:
            if memory is not None:
                memory.record_terminal(z, num_turns)
            return z

        white_to_move = game.is_white_to_move(state)
        player = white if white_to_move else black
        action, policy = player.decide(state, num_turns)
        if memory is not None:
            memory.record_sample(game.canonical_board(state), policy, white_to_move, num_turns)
        game.apply_action(state, action)
        num_turns += 1


def self_play(player: Player, memory) -> float:
    return play_game(player, player, memory)


class ColorPolicy(Enum):
    """
    Policy for attributing colors in a duel between a baseline and a contender.
    """
    ALTERNATE_COLORS = "alternate"
    BASELINE_WHITE = "baseline_white"
    CONTENDER_WHITE = "contender_white"


def pit(handler: Callable[[int, float], None],
        baseline: Player,
        contender: Player,
        num_games: int,
        reset_every: int | None = None,
        color_policy: ColorPolicy = ColorPolicy.ALTERNATE_COLORS) -> float:
    """
    Evaluate two players against each other on a series of games.

    Args:
        handler: called after each game with the game number i (starting at 1)
            and the reward z collected by the contender
        baseline, contender: the players
        num_games: number of games to play
        reset_every: if set, both players are reset every `reset_every` games
            and after the last one
        color_policy: see ColorPolicy

    Returns:
        float: average reward of the contender
    """
    if num_games < 1:
        raise ValueError(f"[Pit] num_games must be >= 1, got {num_games}")
    if reset_every is not None and reset_every < 1:
        raise ValueError(f"[Pit] reset_every must be >= 1, got {reset_every}")

    baseline_white = color_policy != ColorPolicy.CONTENDER_WHITE
    z_sum = 0.0
    for i in range(1, num_games + 1):
        white = baseline if baseline_white else contender
        black = contender if baseline_white else baseline
        z = play_game(white, black)
        if baseline_white:
            z = -z
        z_sum += z
        logger.debug(f"[Pit] Game {i}/{num_games}: contender {'black' if baseline_white else 'white'}, reward {z}")
        handler(i, z)

        if reset_every is not None and (i % reset_every == 0 or i == num_games):
            baseline.reset_state()
            contender.reset_state()

        if color_policy == ColorPolicy.ALTERNATE_COLORS:
            baseline_white = not baseline_white

    return z_sum / num_games
