import logging

logger = logging.getLogger(__name__)


class TorchBackend:

    def __init__(self, device=None):
        import torch
        self.xp = torch
        self._device = torch.device(device) if device is not None else torch.device("cpu")
        if self._device.type == "mps":
            # eigh and complex128 are needed by the Hamiltonians
            raise NotImplementedError("[Torch] MPS lacks float64 support, use 'cpu' or 'cuda'.")

        logger.info("[Torch] Using device: %s", self._device)

    @property
    def device(self):
        return self._device

    """Subset of Array-API interface mapped to torch."""
    def __getattr__(self, name):
        # delegate to torch if it exists
        if hasattr(self.xp, name):
            return getattr(self.xp, name)
        raise AttributeError(f"TorchCompat: torch has no attribute '{name}'")

    # explicit overrides for missing Array API functions
    def asarray(self, x, dtype=None):
        # as_tensor keeps the autograd graph of tensors that are already on device
        return self.xp.as_tensor(x, device=self.device, dtype=dtype)

    def copy(self, x):
        return x.clone()

    def zeros(self, shape, dtype=None, device=None):
        if device is None:
            device = self.device
        return self.xp.zeros(shape, device=device, dtype=dtype)
