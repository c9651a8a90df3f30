import numpy as np
import pytest

from nu_osccalc.hamiltonian import matter_constant, vacuum
from nu_osccalc.models.mixing import Mixing
from nu_osccalc.models.parameters import OscParameters
from nu_osccalc.models.spectrum import Spectrum
from nu_osccalc.utils.flavors import NUE, NUMU, NUTAU, channel_index
from nu_osccalc.utils.units import GEV_TO_EV, KM_TO_EVINV

params = OscParameters()
E_GeV = np.linspace(0.5, 5.0, 10)
E_signed = np.concatenate([E_GeV, -E_GeV])


def as_matrix(block):
    # block[k, 3*j + i] = P(i -> j); returns P[k, i, j]
    return block.reshape(-1, 3, 3).swapaxes(-1, -2)


def test_mixing_matrix_is_unitary():
    U = Mixing(params).build_mixing_matrix()
    np.testing.assert_allclose(U @ U.conj().T, np.eye(3), atol=1e-14)
    assert np.isclose(abs(U[0, 2]), np.sin(params.th13))
    assert np.isclose(np.angle(U[0, 2]), np.angle(np.exp(-1j * params.deltacp)))


def test_spectrum():
    s = Spectrum(params)
    np.testing.assert_allclose(s.get_m2(), [0.0, params.dmsq21, params.dmsq21 + params.dmsq32])
    assert np.isclose(s.get_dm2(3, 2), params.dmsq32)
    inverted = Spectrum(params.replace(dmsq32=-2.5e-3))
    assert inverted.get_dm2(3, 1) < 0


@pytest.mark.parametrize("engine", [matter_constant.compute_all, vacuum.compute_all])
def test_block_shape_and_unitarity(engine):
    block = engine(E_signed, params.rho, params.L, params)
    assert block.shape == (2 * len(E_GeV), 9)
    P = as_matrix(block)
    np.testing.assert_allclose(P.sum(axis=-1), 1.0, atol=1e-12)  # sum over final flavors
    np.testing.assert_allclose(P.sum(axis=-2), 1.0, atol=1e-12)  # sum over initial flavors


@pytest.mark.parametrize("engine", [matter_constant.compute_all, vacuum.compute_all])
def test_zero_baseline_identity(engine):
    block = engine(E_signed, params.rho, 0.0, params.replace(L=0.0))
    np.testing.assert_allclose(as_matrix(block), np.broadcast_to(np.eye(3), (len(E_signed), 3, 3)), atol=1e-14)


def test_matter_without_density_is_vacuum():
    p0 = params.replace(rho=0.0)
    P_matter = matter_constant.compute_all(E_signed, 0.0, p0.L, p0)
    P_vacuum = vacuum.compute_all(E_signed, 0.0, p0.L, p0)
    np.testing.assert_allclose(P_matter, P_vacuum, atol=1e-9)


def test_vacuum_two_flavor_limit():
    # with θ12 = θ13 = 0 only the μ-τ sector oscillates
    p = params.replace(th12=0.0, th13=0.0)
    block = vacuum.compute_all(E_GeV, 0.0, p.L, p)
    phase = p.dmsq32 * p.L / E_GeV * KM_TO_EVINV / GEV_TO_EV / 4.0
    expected = 1.0 - np.sin(2 * p.th23) ** 2 * np.sin(phase) ** 2
    np.testing.assert_allclose(block[:, channel_index(NUMU, NUMU)], expected, atol=1e-10)
    np.testing.assert_allclose(block[:, channel_index(NUE, NUE)], 1.0, atol=1e-14)


def test_vacuum_cpt():
    # P(ν_a -> ν_b) = P(ν̄_b -> ν̄_a) in vacuum
    P = as_matrix(vacuum.compute_all(E_signed, 0.0, params.L, params))
    n = len(E_GeV)
    np.testing.assert_allclose(P[:n], P[n:].swapaxes(-1, -2), atol=1e-12)


def test_vacuum_cp_conserving_symmetry():
    p = params.replace(deltacp=0.0)
    block = vacuum.compute_all(E_signed, 0.0, p.L, p)
    n = len(E_GeV)
    np.testing.assert_allclose(block[:n], block[n:], atol=1e-12)


def test_matter_effect_normal_ordering():
    # MSW: in normal ordering matter enhances ν_μ -> ν_e and suppresses the antineutrino channel
    p = params.replace(deltacp=0.0)
    E = np.array([2.5, -2.5])
    P_matter = matter_constant.compute_all(E, 2.8, p.L, p)
    P_vacuum = vacuum.compute_all(E, 0.0, p.L, p)
    col = channel_index(NUMU, NUE)
    assert P_matter[0, col] > P_vacuum[0, col]
    assert P_matter[1, col] < P_vacuum[1, col]


def test_zero_energy_is_rejected():
    with pytest.raises(ValueError):
        matter_constant.compute_all(np.array([0.0, -0.0]), params.rho, params.L, params)


def test_tau_appearance_is_allowed():
    block = matter_constant.compute_all(E_GeV, params.rho, params.L, params)
    assert np.all(block[:, channel_index(NUMU, NUTAU)] > 0.0)
