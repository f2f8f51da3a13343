#!/usr/bin/env python3
"""
Filename: replay_buffer.py
Author: Vojtěch Havlíček
Created: 2025-07-11
Description: Buffer to store training examples from self-play games.
License: MIT
"""


import random
from collections import deque

from arena.constants import BUFFER_CAPACITY


class ReplayBuffer:
    """
    Memory sink for self-play.

    Samples of the game in progress are staged by `record_sample` and only
    become training examples once `record_terminal` reports the outcome.
    Each example is (board, policy, value, turns_to_end), where value is
    the final reward seen from the side that was to move.
    """
    def __init__(self, capacity=BUFFER_CAPACITY):
        self.buffer = deque(maxlen=capacity)
        self.num_games = 0
        self._pending = []

    def record_sample(self, board, policy, white_to_move: bool, turn: int):
        self._pending.append((board, policy, white_to_move, turn))

    def record_terminal(self, reward: float, game_length: int):
        """
        Close the current game. FIFO behavior is maintained by using a deque with a maximum length.

        Args:
            reward (float): final reward from white's perspective
            game_length (int): number of turns played
        """
        examples = [
            (board, policy, reward if white else -reward, game_length - turn)
            for board, policy, white, turn in self._pending
        ]
        self.buffer.extend(examples)
        self._pending = []
        self.num_games += 1

    def sample_batch(self, batch_size):
        """
        Sample a batch of training examples from the buffer.
        """
        if len(self.buffer) < batch_size:
            return list(self.buffer)  # Return all if not enough samples
        return random.sample(self.buffer, batch_size)

    def __len__(self) -> int:
        return len(self.buffer)
