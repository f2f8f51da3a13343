from arena.games import Game, Gomoku, TicTacToe
from arena.mcts import MCTS, Oracle, RandomOracle
from arena.params import MctsParams
from arena.play import ColorPolicy, pit, play_game, self_play
from arena.players import MctsPlayer, Player, RandomPlayer, fix_probvec, random_mcts_player
from arena.schedule import StepSchedule
