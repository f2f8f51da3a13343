from dataclasses import dataclass, field

from arena.constants import (
    CPUCT,
    DEVICE,
    DIRICHLET_NOISE_EPSILON,
    DIRICHLET_NOISE_NALPHA,
    NUM_ITERS_PER_TURN,
)
from arena.schedule import StepSchedule, default_temperature_schedule


@dataclass
class MctsParams:
    """
    Parameters of a search-based player.

    num_iters_per_turn: simulations per move, 0 means "ask the oracle directly"
    cpuct: exploration constant of the tree search
    temperature: turn -> temperature used when turning visit counts into a policy
    dirichlet_noise_nalpha: Dirichlet concentration, divided by the number of actions
    dirichlet_noise_epsilon: weight of the noise in the sampling distribution, 0 disables it
    device: where a network oracle is copied to
    """
    num_iters_per_turn: int = NUM_ITERS_PER_TURN
    cpuct: float = CPUCT
    temperature: StepSchedule = field(default_factory=default_temperature_schedule)
    dirichlet_noise_nalpha: float = DIRICHLET_NOISE_NALPHA
    dirichlet_noise_epsilon: float = DIRICHLET_NOISE_EPSILON
    device: str = DEVICE

    def __post_init__(self):
        if self.num_iters_per_turn < 0:
            raise ValueError(f"[MctsParams] num_iters_per_turn must be >= 0, got {self.num_iters_per_turn}")
        if self.cpuct < 0:
            raise ValueError(f"[MctsParams] cpuct must be >= 0, got {self.cpuct}")
        if self.dirichlet_noise_nalpha < 0:
            raise ValueError(f"[MctsParams] dirichlet_noise_nalpha must be >= 0, got {self.dirichlet_noise_nalpha}")
        if not 0.0 <= self.dirichlet_noise_epsilon <= 1.0:
            raise ValueError(
                f"[MctsParams] dirichlet_noise_epsilon must be in [0, 1], got {self.dirichlet_noise_epsilon}"
            )
        if not isinstance(self.temperature, StepSchedule):
            self.temperature = StepSchedule.constant(self.temperature)
