#!/usr/bin/env python3
"""
Filename: games.py
Author: Vojtěch Havlíček
Created: 2025-07-11
Description: Rules engine interface and the Gomoku / TicTacToe implementation.
License: MIT
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass

import torch

from arena.constants import BOARD_SIZE, DEVICE, DRAW, O, WIN_LENGTH, X

# NOTE: the canonical board uses relative perspective:
# THE PLAYER TO MOVE IS ALWAYS IN THE FIRST CHANNEL,
# AND THE OPPONENT IS IN THE SECOND CHANNEL.


class Game(ABC):
    """
    Rules of a two-player, alternating, zero-sum game.

    States are mutable and owned by whoever created them. White (X) moves
    first and every reward is reported from white's perspective.
    """

    @abstractmethod
    def initial_state(self):
        """Fresh state of a new game."""

    @abstractmethod
    def legal_actions(self, state) -> list:
        """Ordered list of legal actions, empty only if the game is over."""

    @abstractmethod
    def canonical_board(self, state):
        """Board encoding from the point of view of the side to move."""

    @abstractmethod
    def is_white_to_move(self, state) -> bool:
        ...

    @abstractmethod
    def terminal_reward(self, state) -> float | None:
        """White's reward if the game is over, None otherwise."""

    @abstractmethod
    def apply_action(self, state, action) -> None:
        """Play `action` in place."""

    # Used by the search engine only
    @abstractmethod
    def clone(self, state):
        ...

    @abstractmethod
    def state_key(self, state):
        """Hashable key identifying the position (and side to move)."""


class GomokuState:
    """
    Mutable Gomoku position.
    """
    def __init__(self, board_size):
        self.board_size = board_size
        self.board = [[None for _ in range(board_size)] for _ in range(board_size)]
        self.current_player = X
        self.last_action = None
        self.winner = None  # X, O, DRAW or None while the game is running
        self.num_stones = 0

    def __repr__(self) -> str:
        board_str = "\n".join(
            " | ".join(cell if cell is not None else " " for cell in row)
            for row in self.board
        )
        return f"GomokuState(\n{board_str}\n)"


@dataclass(frozen=True)
class Gomoku(Game):
    """
    m,n,k-game on a square board: first to put `win_length` stones in a row wins.
    """
    board_size: int = BOARD_SIZE
    win_length: int = WIN_LENGTH
    device: str = DEVICE

    def __post_init__(self):
        if not isinstance(self.board_size, int) or self.board_size < 1:
            raise ValueError(f"[Gomoku] Invalid board size: {self.board_size}. Must be a positive integer.")
        if not 1 <= self.win_length <= self.board_size:
            raise ValueError(f"[Gomoku] Invalid win length: {self.win_length} for board size {self.board_size}.")

    def initial_state(self) -> GomokuState:
        return GomokuState(self.board_size)

    #MARK: Board manipulation
    def legal_actions(self, state: GomokuState) -> list[tuple[int, int]]:
        """
        Returns:
            List of (r, c) tuples of empty cells in row-major order, empty once the game is over.
        """
        if state.winner is not None:
            return []
        return [
            (r, c)
            for r in range(self.board_size)
            for c in range(self.board_size)
            if state.board[r][c] is None
        ]

    def is_white_to_move(self, state: GomokuState) -> bool:
        return state.current_player == X

    def apply_action(self, state: GomokuState, action) -> None:
        r, c = action
        if state.winner is not None:
            raise ValueError(f"[Gomoku] Game is over, cannot play {action}")
        if not (0 <= r < self.board_size and 0 <= c < self.board_size) or state.board[r][c] is not None:
            raise ValueError(f"[Gomoku] Invalid move {action}")

        player = state.current_player
        state.board[r][c] = player
        state.last_action = (r, c)
        state.num_stones += 1
        state.current_player = O if player == X else X

        if self._makes_line(state, r, c, player):
            state.winner = player
        elif state.num_stones == self.board_size * self.board_size:
            state.winner = DRAW

    # MARK: Get game results
    def terminal_reward(self, state: GomokuState) -> float | None:
        if state.winner is None:
            return None
        if state.winner == DRAW:
            return 0.0
        return 1.0 if state.winner == X else -1.0

    # MARK: GameState encoding
    def canonical_board(self, state: GomokuState) -> torch.Tensor:
        """
        Encodes the board as a (4, board_size, board_size) float tensor:
        - channel 0: stones of the player to move
        - channel 1: stones of the opponent
        - channel 2: last move
        - channel 3: empty cells
        """
        encoded = torch.zeros(
            (4, self.board_size, self.board_size), dtype=torch.float32, device=self.device
        )
        current_player = state.current_player
        for r in range(self.board_size):
            for c in range(self.board_size):
                cell = state.board[r][c]
                if cell is None:
                    encoded[3, r, c] = 1.0
                elif cell == current_player:
                    encoded[0, r, c] = 1.0
                else:
                    encoded[1, r, c] = 1.0

        if state.last_action is not None:
            r, c = state.last_action
            encoded[2, r, c] = 1.0
        return encoded

    # MARK: Cloning
    def clone(self, state: GomokuState) -> GomokuState:
        new_state = GomokuState(self.board_size)
        new_state.board = [row[:] for row in state.board]
        new_state.current_player = state.current_player
        new_state.last_action = state.last_action
        new_state.winner = state.winner
        new_state.num_stones = state.num_stones
        return new_state

    def state_key(self, state: GomokuState):
        return (tuple(tuple(row) for row in state.board), state.current_player)

    # MARK: Checks whether the stone just placed at (r, c) completes a line.
    def _makes_line(self, state: GomokuState, r, c, player) -> bool:
        for dr, dc in ((0, 1), (1, 0), (1, 1), (1, -1)):
            count = 1 + self._count(state, r, c, dr, dc, player) + self._count(state, r, c, -dr, -dc, player)
            if count >= self.win_length:
                return True
        return False

    def _count(self, state: GomokuState, r, c, dr, dc, player) -> int:
        count = 0
        nr, nc = r + dr, c + dc
        while (
            0 <= nr < self.board_size
            and 0 <= nc < self.board_size
            and state.board[nr][nc] == player
        ):
            count += 1
            nr, nc = nr + dr, nc + dc
        return count


@dataclass(frozen=True)
class TicTacToe(Gomoku):
    board_size: int = 3
    win_length: int = 3
