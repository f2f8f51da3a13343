# --- Board ---
BOARD_SIZE = 7
WIN_LENGTH = 5

DEVICE = "cpu"

# ---- GAMEPLAY CONSTANTS ----
X = "X"  # White, moves first
O = "O"  # Black
DRAW = "D"

# ---- SEARCH PARAMETERS ----
NUM_ITERS_PER_TURN = 100  # MCTS simulations per move. 0 = query the oracle directly.
CPUCT = 2.0  # Exploration constant for PUCT
MIN_TEMPERATURE = 1e-7  # At or below this, the policy is the argmax of the visit counts

# ---- TEMPERATURE SCHEDULE ----
TEMPERATURE_START = 1.0
TEMPERATURE_DROP_TURN = 10  # Turn at which play becomes (almost) greedy
TEMPERATURE_FINAL = 0.3

# ---- DIRICHLET NOISE ----
DIRICHLET_NOISE_NALPHA = 10.0  # Concentration is NALPHA / number of legal actions
DIRICHLET_NOISE_EPSILON = 0.25  # 0 disables noise

# ---- SELF-PLAY PARAMETERS ----
NUM_SELF_PLAY_GAMES = 200
BUFFER_CAPACITY = 40_000

# ---- EVAL PARAMETERS ----
EVALUATION_GAMES = 50
PROB_TOLERANCE = 1e-6  # How far from 1 a probability vector may sum before it is renormalized
