from nu_osccalc.globals.backend import Backend
from nu_osccalc.models.parameters import OscParameters


class Spectrum:
    """
    Three-flavor mass spectrum built from Δm²_21 and Δm²_32.

    Only mass-squared differences enter the propagation, so m1² is pinned
    to zero:
        m² = [0, Δm²_21, Δm²_21 + Δm²_32]
    A negative Δm²_32 describes the inverted ordering.
    """
    n_neutrinos = 3

    def __init__(self, params: OscParameters):
        self._dmsq21 = params.dmsq21
        self._dmsq32 = params.dmsq32

    def get_dm2(self, i: int, j: int):
        """Return Δm²_ij = m_i² − m_j² (1-based indices)."""
        m2 = self.get_m2()
        return m2[i - 1] - m2[j - 1]

    def get_m2(self):
        xp = Backend.xp()
        dmsq21 = xp.asarray(self._dmsq21, dtype=Backend.real_dtype())
        dmsq32 = xp.asarray(self._dmsq32, dtype=Backend.real_dtype())
        return xp.stack([dmsq21 * 0.0, dmsq21, dmsq21 + dmsq32])
