import copy
import logging

import numpy as np
import torch

from arena.mcts import Oracle

logger = logging.getLogger(__name__)


class NeuralNetworkController(Oracle):
    """
    Wraps a policy-value network so that it can be used as a search oracle.

    The network maps a batch of canonical boards (N, C, H, W) to
    (policy logits over the H * W cells, value). Actions are (row, col) cells.
    """
    def __init__(self,
                 net,
                 device):
        logger.debug(f"[Controller] Initializing NeuralNetworkController with device: {device}")
        self.device = device
        self.net = net.to(device).float()  # Ensure the model is in float32 format

    def evaluate(self, board, actions):
        """
        Args:
            board: canonical board tensor of shape (C, H, W)
            actions: list of legal (row, col) actions

        Returns:
            (distribution over `actions`, in the same order, as float32 numpy array; value as float)
        """
        if len(actions) == 0:
            raise ValueError("[Controller] Cannot evaluate a position without legal actions")

        width = board.shape[-1]
        indices = torch.tensor([r * width + c for r, c in actions], dtype=torch.long, device=self.device)
        state_tensor = board.to(self.device).float().unsqueeze(0)  # [1, C, H, W]

        with torch.no_grad():
            policy_logits, value = self.net(state_tensor)
            # Softmax over the legal moves only
            legal_logits = policy_logits[0].index_select(0, indices)
            policy = torch.softmax(legal_logits, dim=0)
            policy = torch.nan_to_num(policy, nan=0.0, posinf=0.0, neginf=0.0)

        return policy.cpu().numpy().astype(np.float32), float(value.item())

    def copy(self, device=None, test_mode=True) -> "NeuralNetworkController":
        """
        Independent copy of the controller, optionally on another device.
        """
        net = copy.deepcopy(self.net)
        if test_mode:
            net.eval()
        else:
            net.train()
        return NeuralNetworkController(net, device=device if device is not None else self.device)
