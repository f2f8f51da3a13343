#!/usr/bin/env python3
"""
Filename: net.py
Author: Vojtěch Havlíček
Created: 2025-07-11
Description: Neural network used as a policy-value oracle.
License: MIT
"""

import torch
import torch.nn as nn
import torch.nn.functional as functional

from arena.constants import BOARD_SIZE


class GomokuNet(nn.Module):
    """
    Input: canonical board of shape (4, board_size, board_size).

    Two outputs:
    1. Policy logits over all board_size * board_size cells.
    2. A value in [-1, 1], from the perspective of the player to move.
    """

    def __init__(self, board_size=BOARD_SIZE):
        super().__init__()
        self.board_size = board_size

        # Using architecture from junxiaosong's implementation of AlphaZero for Gomoku.

        # --- Shared backbone ---
        self.conv1 = nn.Conv2d(4, 32, kernel_size=3, padding=1)
        self.conv2 = nn.Conv2d(32, 64, kernel_size=3, padding=1)
        self.conv3 = nn.Conv2d(64, 128, kernel_size=3, padding=1)

        # --- Policy head ---
        self.policy_conv = nn.Conv2d(128, 4, kernel_size=1)
        self.policy_fc = nn.Linear(4 * board_size * board_size, board_size * board_size)

        # --- Value head ---
        self.value_conv = nn.Conv2d(128, 2, kernel_size=1)
        self.value_fc1 = nn.Linear(2 * board_size * board_size, 64)
        self.value_fc2 = nn.Linear(64, 1)

    def forward(self, x):
        # --- Shared backbone ---
        out = functional.relu(self.conv1(x))
        out = functional.relu(self.conv2(out))
        out = functional.relu(self.conv3(out))

        # --- Policy head ---
        board_size = self.board_size
        policy = functional.relu(self.policy_conv(out))
        policy = policy.view(-1, 4 * board_size * board_size)
        policy_logits = self.policy_fc(policy)

        # --- Value head ---
        value = functional.relu(self.value_conv(out))
        value = functional.relu(self.value_fc1(value.view(value.size(0), -1)))
        value = torch.tanh(self.value_fc2(value))

        return policy_logits, value  # NOTE: raw logits for policy, value in [-1, 1]
