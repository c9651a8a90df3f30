import logging

import numpy as np

logger = logging.getLogger(__name__)


# static class
class Backend:
    _current_api = np  # default
    _api_name = np.__name__
    _real_dtype = "float64"
    _complex_dtype = "complex128"
    _device = None  # e.g. "cuda", "cpu"

    @classmethod
    def set_api(cls, module, device=None):
        """Set xp backend: numpy or torch."""
        cls._api_name = module.__name__
        cls._real_dtype = "float64"
        cls._complex_dtype = "complex128"
        if cls._api_name == "torch":
            from nu_osccalc.backends.torch_backend import TorchBackend
            cls._current_api = TorchBackend(device=device)
            cls._device = cls._current_api.device
        elif cls._api_name == "numpy":
            cls._current_api = module
            cls._device = None
        else:
            raise NotImplementedError(f"Unsupported array backend: {cls._api_name}")
        logger.info("Array backend set to %s (device=%s)", cls._api_name, cls._device)

    @classmethod
    def api_name(cls):
        return cls._api_name

    @classmethod
    def xp(cls):
        """Return the current array API namespace."""
        return cls._current_api

    @classmethod
    def real_dtype(cls):
        xp = cls._current_api
        return getattr(xp, cls._real_dtype, cls._real_dtype)

    @classmethod
    def complex_dtype(cls):
        xp = cls._current_api
        return getattr(xp, cls._complex_dtype, cls._complex_dtype)

    @classmethod
    def from_device(cls, arr):
        """Pull array back to CPU (NumPy)."""
        if cls._api_name == "torch":
            return arr.detach().cpu().numpy()
        return np.asarray(arr)


# default is Numpy
Backend.set_api(np)
