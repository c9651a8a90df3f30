from nu_osccalc.globals.backend import Backend
from nu_osccalc.models.parameters import OscParameters


class Mixing:
    """
    Three-flavor PMNS matrix.
    Angles and the Dirac phase are read from an OscParameters snapshot and
    kept as given, so torch tensors carry their autograd graph into U.
    """
    n_neutrinos = 3

    def __init__(self, params: OscParameters):
        self.mixing_angles = {(1, 2): params.th12, (1, 3): params.th13, (2, 3): params.th23}
        self.dirac_phases = {(1, 3): params.deltacp}

    def build_mixing_matrix(self):
        """
        Return the complex mixing matrix U (3x3) in PDG convention:
            U = R23 * U13(delta) * R12
        """
        xp = Backend.xp()
        U = xp.eye(self.n_neutrinos, dtype=Backend.complex_dtype())

        # Apply rotations in PDG order (right-multiply: rotations act on mass columns)
        for (i, j) in [(2, 3), (1, 3), (1, 2)]:
            theta = xp.asarray(self.mixing_angles[(i, j)], dtype=Backend.real_dtype())
            delta = xp.asarray(self.dirac_phases.get((i, j), 0.0), dtype=Backend.real_dtype())
            s = xp.asarray(xp.sin(theta), dtype=Backend.complex_dtype())
            c = xp.asarray(xp.cos(theta), dtype=Backend.complex_dtype())

            R = xp.eye(self.n_neutrinos, dtype=Backend.complex_dtype())
            ii, jj = i - 1, j - 1
            R[ii, ii] = c
            R[jj, jj] = c
            R[ii, jj] = s * xp.exp(-1j * delta)
            R[jj, ii] = -s * xp.exp(+1j * delta)

            U = U @ R

        return U
