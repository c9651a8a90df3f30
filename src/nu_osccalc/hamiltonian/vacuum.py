from nu_osccalc.hamiltonian.base import HamiltonianBase
from nu_osccalc.globals.backend import Backend
from nu_osccalc.models.parameters import OscParameters


class Hamiltonian(HamiltonianBase):
    def __init__(self, params: OscParameters):
        super().__init__(params=params)

    def get_barger_propagator(self, L, E):
        xp = Backend.xp()

        U = self._mixing.build_mixing_matrix()
        # antineutrinos propagate with U*
        signA = xp.sign(E)[:, None, None]
        U = U.real[None, ...] + 1j * signA * U.imag[None, ...]     # (nE, nF, nF)
        Ud = xp.conj(U).swapaxes(-1, -2)

        # phases φ_i = 1/2 * m_i^2[eV^2] * L[eV-1] / |E|[eV]
        m2 = self._spectrum.get_m2()
        phases = 0.5 * (L / xp.abs(E))[:, None] * m2[None, :]      # (nE, nF)
        D = xp.exp(-1j * phases)[:, None, :]                        # (nE, 1, nF)

        return (U * D) @ Ud


def compute_all(energies, rho, L, params: OscParameters):
    """Vacuum engine with the calculator's signature; `rho` is ignored."""
    h = Hamiltonian(params=params.replace(L=L))
    return h.probability_block(L_km=L, E_GeV=energies)
