import numpy as np
import pytest

from atomnumerov.grid import ExponentialGrid, UniformGrid, trapezoid_weights
from atomnumerov.utils import normalize_radial_u, normalize_solution, radial_derivative, trapz


@pytest.mark.quick
def test_trapz_with_and_without_weights():
    r = np.linspace(0.0, 2.0, 201)
    w = trapezoid_weights(r)
    y = r * r
    assert np.isclose(trapz(y, r, w), trapz(y, r), rtol=0, atol=1e-12)
    assert np.isclose(trapz(y, r), 8.0 / 3.0, atol=1e-3)


@pytest.mark.quick
def test_normalize_radial_u_hydrogen_1s():
    r = np.linspace(0.0, 40.0, 4001)
    w = trapezoid_weights(r)
    u_norm, norm = normalize_radial_u(3.0 * r * np.exp(-r), r, w)
    assert np.isclose(norm, 1.5, rtol=1e-4)
    assert np.isclose(np.sum(w * u_norm ** 2), 1.0)


@pytest.mark.grid
@pytest.mark.quick
def test_normalize_solution_exponential_grid():
    n = 801
    grid = ExponentialGrid(np.zeros(n), r_max=30.0, delta=0.01, num_points=n)
    r = grid.positions(n)
    # 构造 v = u e^{-iδ/2}，归一化后应还原 u = 2 r e^{-r}
    v = r * np.exp(-r) * np.exp(-0.005 * np.arange(n))
    r_out, u, _ = normalize_solution(v, grid)
    assert np.allclose(r_out, r)
    assert np.allclose(u, 2.0 * r * np.exp(-r), atol=1e-3)


@pytest.mark.grid
@pytest.mark.quick
def test_radial_derivative_uses_local_spacing():
    n = 501
    grid = ExponentialGrid(np.zeros(n), r_max=20.0, delta=0.01, num_points=n)
    r = grid.positions(n)
    # 线性函数的后向差分精确为 1
    assert np.allclose(radial_derivative(r, grid), 1.0)

    ugrid = UniformGrid(np.zeros(11))
    h = 0.1
    y = (np.arange(11) * h) ** 2
    d = radial_derivative(y, ugrid, h)
    assert np.isclose(d[5], (y[5] - y[4]) / h)


@pytest.mark.quick
def test_radial_derivative_rejects_short_input():
    with pytest.raises(ValueError):
        radial_derivative(np.array([1.0]), UniformGrid(np.zeros(2)))
