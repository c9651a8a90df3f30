from nu_osccalc.globals.backend import Backend
from nu_osccalc.models.parameters import OscParameters
from nu_osccalc.models.spectrum import Spectrum
from nu_osccalc.models.mixing import Mixing
from nu_osccalc.utils.units import GEV_TO_EV, KM_TO_EVINV

from abc import ABC, abstractmethod


class HamiltonianBase(ABC):
    def __init__(self, params: OscParameters):
        self._params = params
        self._mixing = Mixing(params)
        self._spectrum = Spectrum(params)
        self._check_parameters()

    @property
    def n_neutrinos(self):
        return self._mixing.n_neutrinos

    @property
    def mixing(self):
        return self._mixing

    @property
    def spectrum(self):
        return self._spectrum

    @abstractmethod
    def get_barger_propagator(self, L, E) -> any:
        """
        Return S(L) in FLAVOR basis, shape (nE, nF, nF).
        L in eV^-1, E signed in eV (negative entries are antineutrinos).
        """
        ...

    def probability_block(self, L_km, E_GeV):
        """
        Transition probabilities for each signed energy, shape (nE, 9).

        Column 3*j + i holds P(i -> j) for flavors i, j in (e, mu, tau),
        which is |S_ji|^2 flattened row-major.
        """
        xp = Backend.xp()
        E = xp.asarray(E_GeV, dtype=Backend.real_dtype()) * GEV_TO_EV
        # don't use `*=` since L may be a parameter tensor
        L = xp.asarray(L_km, dtype=Backend.real_dtype()) * KM_TO_EVINV
        if E.ndim == 0:
            E = E.reshape(1)
        if xp.any(E == 0):
            raise ValueError("Neutrino energies must be non-zero.")

        S = self.get_barger_propagator(L=L, E=E)                # (nE, nF, nF)
        P = xp.abs(S) ** 2
        return P.reshape(E.shape[0], self.n_neutrinos * self.n_neutrinos)

    def _check_parameters(self):
        assert (self._spectrum.n_neutrinos == self._mixing.n_neutrinos)
