from nu_osccalc.hamiltonian.base import HamiltonianBase
from nu_osccalc.globals.backend import Backend
from nu_osccalc.models.parameters import OscParameters
from nu_osccalc.utils.units import VCOEFF_EV


class Hamiltonian(HamiltonianBase):
    """
        Constant-density matter Hamiltonian.

        The sign of each energy selects the particle: E > 0 propagates a
        neutrino with (U, +V), E < 0 an antineutrino with (U*, -V) at |E|.
    """
    def __init__(self, params: OscParameters, Ye: float = 0.5):
        super().__init__(params=params)
        self._rho = params.rho
        self._Ye = Ye

    def get_barger_propagator(self, L, E):
        xp = Backend.xp()

        U = self._mixing.build_mixing_matrix()
        Ud = xp.conj(U).swapaxes(-1, -2)
        m2 = xp.asarray(self._spectrum.get_m2(), dtype=U.dtype)
        H_vacuum_eV2 = (U * m2[None, :]) @ Ud

        flavor_projector = xp.zeros((self.n_neutrinos, self.n_neutrinos), dtype=U.dtype)
        flavor_projector[0, 0] = 1.0  # only electron neutrinos feel the potential

        # antineutrinos: H_vacuum -> H_vacuum*, V -> -V
        signA = xp.sign(E)[:, None, None]
        H_flavor = H_vacuum_eV2.real[None, ...] + 1j * signA * H_vacuum_eV2.imag[None, ...]

        inv2E = (0.5 / xp.abs(E))[:, None, None]  # used for the hamiltonian
        matter_potential = VCOEFF_EV * self._rho * self._Ye
        H = H_flavor * inv2E + (signA * matter_potential) * flavor_projector[None, ...]

        eigen_values, eigen_vectors = xp.linalg.eigh(H)
        phases = xp.exp(-1j * eigen_values * L)
        S = (eigen_vectors * phases[:, None, :]) @ xp.conj(eigen_vectors).swapaxes(-1, -2)

        return S


def compute_all(energies, rho, L, params: OscParameters):
    """
    Physics engine used by the oscillation calculator.

    Returns the (2N, 9) probability block for the signed energy array
    `energies` [GeV] across a baseline `L` [km] of density `rho` [g/cm³].
    """
    h = Hamiltonian(params=params.replace(rho=rho, L=L))
    return h.probability_block(L_km=L, E_GeV=energies)
