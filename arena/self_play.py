#!/usr/bin/env python3
"""
Filename: self_play.py
Author: Vojtěch Havlíček
Created: 2025-07-11
Description: Self-play data generation for AlphaZero algorithm.
License: MIT
"""

import logging

from tqdm import tqdm

from arena.constants import NUM_SELF_PLAY_GAMES
from arena.play import self_play
from arena.players import Player
from arena.replay_buffer import ReplayBuffer

logger = logging.getLogger(__name__)


class SelfPlayManager:
    """
    Plays a player against itself and stores the games in a replay buffer.

    Games are played one after another, the player's search tree is reset
    between games.
    """
    def __init__(self, player: Player, buffer: ReplayBuffer):
        self.player = player
        self.buffer = buffer

    def generate_self_play(self, num_games: int = NUM_SELF_PLAY_GAMES, progress=True) -> list[float]:
        """
        Returns:
            list: white's reward of every game played
        """
        size_before = len(self.buffer)
        rewards = []
        for _ in tqdm(range(num_games), desc="[SelfPlay] Self-play", ncols=80, disable=not progress):
            rewards.append(self_play(self.player, self.buffer))
            self.player.reset_state()

        logger.info(
            f"[SelfPlay] Played {num_games} games, buffer grew from {size_before} to {len(self.buffer)} examples"
        )
        return rewards
