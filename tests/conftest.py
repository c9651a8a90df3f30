import numpy as np
import pytest

from nu_osccalc.globals.backend import Backend
from nu_osccalc.hamiltonian import matter_constant


class CountingEngine:
    """Engine stand-in that records every call before delegating."""

    def __init__(self, engine=matter_constant.compute_all):
        self.calls = 0
        self.last_energies = None
        self._engine = engine

    def __call__(self, energies, rho, L, params):
        self.calls += 1
        self.last_energies = np.array(energies)
        return self._engine(energies, rho, L, params)


def tagged_block(energies, rho, L, params):
    """Block whose cell (k, c) holds 100*k + c, to follow rows through the reshape."""
    n_rows = len(energies)
    return 100.0 * np.arange(n_rows)[:, None] + np.arange(9)[None, :]


@pytest.fixture
def counting_engine():
    return CountingEngine()


@pytest.fixture
def numpy_backend():
    yield Backend
    Backend.set_api(np)
