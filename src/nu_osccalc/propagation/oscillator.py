import logging

import numpy as np

from nu_osccalc.globals.backend import Backend
from nu_osccalc.hamiltonian import matter_constant
from nu_osccalc.models.parameters import OscParameters
from nu_osccalc.propagation.cache import ResultCache
from nu_osccalc.utils.flavors import channel_index

logger = logging.getLogger(__name__)


def _parameter_property(name):
    def getter(self):
        return getattr(self._params, name)

    def setter(self, value):
        self._params = self._params.replace(**{name: value})

    return property(getter, setter, doc=f"Current value of `{name}`.")


class OscillationCalculator:
    """
    Oscillation probabilities with a cache over the last (parameters, energies).

    Queries take signed PDG flavor codes (±12, ±14, ±16) and energies in GeV.
    The cache is refilled only when the current parameters or the requested
    energy grid differ exactly from the cached ones.

    Not thread-safe: use `copy()` to get an independent instance per worker.
    """

    # scalar queries may be answered from a cache filled by an earlier query
    cache_scalar_queries = True

    dmsq21 = _parameter_property("dmsq21")
    dmsq32 = _parameter_property("dmsq32")
    th12 = _parameter_property("th12")
    th13 = _parameter_property("th13")
    th23 = _parameter_property("th23")
    deltacp = _parameter_property("deltacp")
    L = _parameter_property("L")
    rho = _parameter_property("rho")

    def __init__(self, params: OscParameters = None, engine=matter_constant.compute_all):
        """
        Parameters
        ----------
        params : OscParameters
            Initial parameters, defaults to `OscParameters()`.
        engine : callable
            `engine(expanded_energies, rho, L, params)` returning the (2N, 9)
            probability block for signed energies.
        """
        self._params = params if params is not None else OscParameters()
        self._engine = engine
        self._cache = ResultCache()

    @property
    def params(self) -> OscParameters:
        return self._params

    @params.setter
    def params(self, params: OscParameters):
        self._params = params

    def set_params(self, **changes):
        self._params = self._params.replace(**changes)

    @property
    def cache(self) -> ResultCache:
        return self._cache

    @property
    def revision(self) -> int:
        return self._cache.revision

    def params_are_cached(self) -> bool:
        return not self._cache.is_empty and self._cache.parameters == self._params

    def fill_cache(self, energies):
        self._cache.refill(energies, self._params, self._engine)

    def copy(self) -> "OscillationCalculator":
        other = self.__class__.__new__(self.__class__)
        other._params = self._params
        other._engine = self._engine
        other._cache = self._cache.copy()
        return other

    # ------------------------------------------------------------
    # queries

    def P(self, flavor_before, flavor_after, E, fast_and_loose=False):
        """
        P(before -> after) at E.

        A sequence of energies returns one probability per energy, a single
        energy returns a scalar. `fast_and_loose=True` reads the cache as is,
        see `probability_unchecked`.
        """
        if np.ndim(E) > 0:
            if fast_and_loose:
                raise TypeError("fast_and_loose is only available for a single energy")
            return self.probabilities(flavor_before, flavor_after, E)
        if fast_and_loose:
            return self.probability_unchecked(flavor_before, flavor_after, E)
        return self.probability(flavor_before, flavor_after, E)

    def probabilities(self, flavor_before, flavor_after, energies):
        energies = tuple(energies)
        column = channel_index(flavor_before, flavor_after)
        if self._cache.is_valid(self._params, energies):
            logger.debug("Cache hit for %d energies", len(energies))
        else:
            self.fill_cache(energies)
        return Backend.xp().copy(self._cache.probabilities[:, column])

    def probability(self, flavor_before, flavor_after, energy):
        column = channel_index(flavor_before, flavor_after)
        if self.cache_scalar_queries and self.params_are_cached() and energy in self._cache.energies:
            return self._cache.probabilities[self._cache.row_of(energy), column]

        # the cache is stale
        self.fill_cache([energy])
        return self._cache.probabilities[0, column]

    def probability_unchecked(self, flavor_before, flavor_after, energy):
        """
        Cached P(before -> after) at `energy` without any freshness check.

        Meant for scans over a grid that was just computed with
        `probabilities` and the current parameters; the caller guarantees
        that the cache is up to date. Raises EnergyNotCachedError when
        `energy` is not in the cached grid.
        """
        column = channel_index(flavor_before, flavor_after)
        return self._cache.probabilities[self._cache.row_of(energy), column]


class DifferentiableOscillationCalculator(OscillationCalculator):
    """
    Calculator for torch parameters (`Backend.set_api(torch)`).

    Scalar queries always recompute: probabilities cached by an earlier
    autograd graph must not be reused in a new one.
    """

    cache_scalar_queries = False
