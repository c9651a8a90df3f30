import logging

import numpy as np

from nu_osccalc.exceptions import EnergyNotCachedError, EngineOutputError
from nu_osccalc.globals.backend import Backend
from nu_osccalc.models.parameters import OscParameters
from nu_osccalc.utils.flavors import N_CHANNELS

logger = logging.getLogger(__name__)

N_CHANNELS_PER_PARTICLE = N_CHANNELS // 2


class ResultCache:
    """
    Probabilities of the last computed (parameters, energies) pair.

    Attributes
    ----------
    energies : tuple[float]
        Requested energies [GeV]; position r is row r of `probabilities`.
    expanded_energies : np.ndarray
        `energies` followed by their negations, the particle tag understood
        by the engines (negative = antineutrino). Shape (2N,).
    probabilities : xp.ndarray
        Shape (N, 18). Columns 0-8 are neutrino channels, 9-17 the matching
        antineutrino channels (see `channel_index`).
    parameters : OscParameters | None
        Parameters that produced `probabilities`, None while empty.
    revision : int
        Number of refills so far.
    """

    def __init__(self):
        self.energies = tuple()
        self.expanded_energies = np.zeros(0)
        self.probabilities = None
        self.parameters = None
        self.revision = 0

    @property
    def is_empty(self):
        return self.parameters is None or len(self.energies) == 0

    def is_valid(self, params: OscParameters, energies) -> bool:
        if self.is_empty:
            return False
        return self.parameters == params and self.energies == tuple(energies)

    def row_of(self, energy) -> int:
        try:
            return self.energies.index(energy)
        except ValueError:
            raise EnergyNotCachedError(
                f"E={energy!r} GeV is not among the {len(self.energies)} cached energies"
            ) from None

    def refill(self, energies, params: OscParameters, engine):
        energies = tuple(energies)
        n_energies = len(energies)
        E = np.asarray(energies, dtype=np.float64)
        expanded_energies = np.concatenate([E, -E])

        # rows [0, N) are neutrinos, rows [N, 2N) antineutrinos at the same energies
        block = engine(expanded_energies, params.rho, params.L, params)
        if tuple(block.shape) != (2 * n_energies, N_CHANNELS_PER_PARTICLE):
            raise EngineOutputError(
                f"Engine returned a block of shape {tuple(block.shape)}, "
                f"expected {(2 * n_energies, N_CHANNELS_PER_PARTICLE)}"
            )

        xp = Backend.xp()
        probabilities = xp.zeros((n_energies, N_CHANNELS), dtype=block.dtype)
        probabilities[:, :N_CHANNELS_PER_PARTICLE] = block[:n_energies, :]
        probabilities[:, N_CHANNELS_PER_PARTICLE:] = block[n_energies:, :]

        self.energies = energies
        self.expanded_energies = expanded_energies
        self.probabilities = probabilities
        self.parameters = params
        self.revision += 1
        logger.debug("Cache refilled with %d energies (revision %d)", n_energies, self.revision)

    def copy(self) -> "ResultCache":
        other = ResultCache()
        other.energies = self.energies
        other.expanded_energies = np.copy(self.expanded_energies)
        if self.probabilities is not None:
            other.probabilities = Backend.xp().copy(self.probabilities)
        other.parameters = self.parameters
        other.revision = self.revision
        return other
