from dataclasses import dataclass, fields, replace
import numpy as np


@dataclass(frozen=True)
class OscParameters:
    """
    Snapshot of the inputs that fully determine three-flavor oscillation
    probabilities in constant-density matter.

    Attributes
    ----------
    dmsq21, dmsq32 : T
        Mass-squared differences Δm²_21, Δm²_32 [eV²].
    th12, th13, th23 : T
        Mixing angles θ_ij [rad].
    deltacp : T
        Dirac CP phase δ_CP [rad].
    L : T
        Baseline [km].
    rho : T
        Matter density [g/cm³].

    T is a plain float or a 0-d torch tensor (differentiable backend).
    Equality is exact on all eight fields: no tolerance is applied, so any
    change of a single bit is a different parameter set.
    """

    dmsq21: float = 7.42e-5
    dmsq32: float = 2.4428e-3
    th12: float = np.deg2rad(33.4)
    th13: float = np.deg2rad(8.6)
    th23: float = np.deg2rad(49.0)
    deltacp: float = np.deg2rad(195.0)
    L: float = 1300.0
    rho: float = 2.8

    def __eq__(self, other):
        if not isinstance(other, OscParameters):
            return NotImplemented
        # evaluate field by field so that 0-d tensors reduce to python bools
        return all(bool(getattr(self, f.name) == getattr(other, f.name)) for f in fields(self))

    def replace(self, **changes) -> "OscParameters":
        return replace(self, **changes)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def summary(self):
        print("Oscillation parameters:")
        print(f"  Δm²_21 = {float(self.dmsq21):.4e} eV², Δm²_32 = {float(self.dmsq32):.4e} eV²")
        print(f"  θ12 = {np.rad2deg(float(self.th12)):.3f}°, θ13 = {np.rad2deg(float(self.th13)):.3f}°, "
              f"θ23 = {np.rad2deg(float(self.th23)):.3f}°")
        print(f"  δCP = {np.rad2deg(float(self.deltacp)):.3f}°")
        print(f"  L = {float(self.L):.1f} km, ρ = {float(self.rho):.3f} g/cm³")
