import logging
from dataclasses import replace

from tqdm import tqdm

from arena.constants import EVALUATION_GAMES
from arena.games import Game
from arena.params import MctsParams
from arena.play import ColorPolicy, pit
from arena.players import MctsPlayer

logger = logging.getLogger(__name__)


class ModelEvaluator:
    """
    Evaluates a candidate oracle against a baseline oracle, each wrapped in its own MCTS player.

    Evaluation players never add Dirichlet noise.
    """

    def __init__(self, game: Game, params: MctsParams, rng=None):
        self.game = game
        self.params = params
        self.rng = rng

    def evaluate(self,
                 candidate_oracle,
                 baseline_oracle,
                 num_games=EVALUATION_GAMES,
                 reset_every=None,
                 color_policy=ColorPolicy.ALTERNATE_COLORS,
                 progress=True):
        params = replace(self.params, dirichlet_noise_epsilon=0.0)
        contender = MctsPlayer.from_oracle(self.game, candidate_oracle, params, rng=self.rng)
        baseline = MctsPlayer.from_oracle(self.game, baseline_oracle, params, rng=self.rng)

        tally = {"wins": 0, "losses": 0, "draws": 0}
        with tqdm(total=num_games, desc="[Evaluator] Evaluating", ncols=80, disable=not progress) as pbar:
            def handler(i, z):
                if z > 0:
                    tally["wins"] += 1
                elif z < 0:
                    tally["losses"] += 1
                else:
                    tally["draws"] += 1
                pbar.update(1)

            mean_reward = pit(handler, baseline, contender, num_games,
                              reset_every=reset_every, color_policy=color_policy)

        total = tally["wins"] + tally["losses"] + tally["draws"]
        win_rate = (tally["wins"] + 0.5 * tally["draws"]) / total
        logger.info(
            f"[Evaluator] Candidate Win Rate: {win_rate:.2%} "
            f"(W:{tally['wins']} L:{tally['losses']} D:{tally['draws']})"
        )

        return win_rate, {
            **tally,
            "total": total,
            "win_rate": win_rate,
            "mean_reward": mean_reward,
        }
