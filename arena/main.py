#!/usr/bin/env python3
"""
Filename: main.py
Author: Vojtěch Havlíček
Created: 2025-07-11
Description: Pit two players against each other from the command line.
License: MIT

Usage:
    # MCTS (random oracle) vs random
    arena-pit --baseline random --contender mcts --games 50

    # Raw network policy vs MCTS on Gomoku, fixed colors
    arena-pit --game gomoku --baseline network --contender mcts --color-policy baseline_white
"""

import argparse
import logging
from dataclasses import replace

import numpy as np
import torch
from tqdm import tqdm

from arena.constants import BOARD_SIZE, EVALUATION_GAMES, NUM_ITERS_PER_TURN, WIN_LENGTH
from arena.controller import NeuralNetworkController
from arena.games import Gomoku, TicTacToe
from arena.net import GomokuNet
from arena.params import MctsParams
from arena.play import ColorPolicy, pit
from arena.players import MctsPlayer, RandomPlayer, random_mcts_player
from arena.schedule import StepSchedule

PLAYER_KINDS = ("random", "mcts", "network")


def make_player(kind, game, sims, rng, device):
    """
    random: uniform random legal moves
    mcts: tree search with a uniform oracle
    network: raw policy of a freshly initialized GomokuNet
    """
    params = MctsParams(
        num_iters_per_turn=sims,
        temperature=StepSchedule.constant(1.0),
        dirichlet_noise_epsilon=0.0,
        device=device,
    )
    if kind == "random":
        return RandomPlayer(game, rng=rng)
    if kind == "mcts":
        return random_mcts_player(game, params, rng=rng)
    if kind == "network":
        controller = NeuralNetworkController(GomokuNet(board_size=game.board_size), device=device)
        return MctsPlayer.from_oracle(game, controller, replace(params, num_iters_per_turn=0), rng=rng)
    raise ValueError(f"[Main] Unknown player kind: {kind}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Pit a contender against a baseline")
    parser.add_argument("--game", choices=("tictactoe", "gomoku"), default="tictactoe")
    parser.add_argument("--board-size", type=int, default=BOARD_SIZE,
                        help=f"Gomoku board size (default: {BOARD_SIZE})")
    parser.add_argument("--win-length", type=int, default=WIN_LENGTH,
                        help=f"Gomoku stones in a row to win (default: {WIN_LENGTH})")
    parser.add_argument("--baseline", choices=PLAYER_KINDS, default="random")
    parser.add_argument("--contender", choices=PLAYER_KINDS, default="mcts")
    parser.add_argument("--sims", type=int, default=NUM_ITERS_PER_TURN,
                        help=f"MCTS simulations per move (default: {NUM_ITERS_PER_TURN})")
    parser.add_argument("--games", type=int, default=EVALUATION_GAMES,
                        help=f"Number of games (default: {EVALUATION_GAMES})")
    parser.add_argument("--reset-every", type=int, default=None,
                        help="Reset both players every N games")
    parser.add_argument("--color-policy", choices=[p.value for p in ColorPolicy],
                        default=ColorPolicy.ALTERNATE_COLORS.value)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--device", default="cpu")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.seed is not None:
        torch.manual_seed(args.seed)
    rng = np.random.default_rng(args.seed)

    if args.game == "tictactoe":
        game = TicTacToe(device=args.device)
    else:
        game = Gomoku(board_size=args.board_size, win_length=args.win_length, device=args.device)

    baseline = make_player(args.baseline, game, args.sims, rng, args.device)
    contender = make_player(args.contender, game, args.sims, rng, args.device)

    print(f"{'=' * 60}")
    print(f"  {game} - {args.games} games")
    print(f"  Baseline:  {args.baseline}")
    print(f"  Contender: {args.contender}")
    print(f"{'=' * 60}")

    results = []
    with tqdm(total=args.games, desc="[Pit] Games", ncols=80) as pbar:
        def handler(i, z):
            results.append(z)
            pbar.update(1)

        score = pit(handler, baseline, contender, args.games,
                    reset_every=args.reset_every,
                    color_policy=ColorPolicy(args.color_policy))

    wins = sum(1 for z in results if z > 0)
    losses = sum(1 for z in results if z < 0)
    draws = len(results) - wins - losses
    print(f"  Contender score: {score:+.3f}  (W:{wins} L:{losses} D:{draws})")
    return score


if __name__ == "__main__":
    main()
