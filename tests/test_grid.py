import math

import numpy as np
import pytest

from atomnumerov.grid import ExponentialGrid, UniformGrid, trapezoid_weights
from atomnumerov.potential import Potential


@pytest.mark.grid
@pytest.mark.quick
def test_trapezoid_weights_match_np_trapezoid():
    r = np.linspace(0.0, 1.0, 1001)
    w = trapezoid_weights(r)
    f = np.sin(2 * np.pi * r)
    assert np.isclose(np.sum(w * f), np.trapezoid(f, r), rtol=0, atol=1e-12)


@pytest.mark.grid
@pytest.mark.quick
def test_trapezoid_weights_reject_non_monotonic():
    with pytest.raises(ValueError):
        trapezoid_weights(np.array([0.0, 2.0, 1.0]))


@pytest.mark.grid
@pytest.mark.quick
def test_potential_rejects_non_1d():
    with pytest.raises(ValueError):
        Potential(np.zeros((3, 3)))


@pytest.mark.grid
@pytest.mark.quick
def test_uniform_effective_potential_and_coefficient():
    v = np.array([0.0, -1.0, -0.5, -0.25])
    grid = UniformGrid(v)
    # V_2 + l(l+1)/(2 r^2)，l=1, r=2
    assert np.isclose(grid.effective_potential(1, 2.0, 2), -0.5 + 0.25)
    assert np.isclose(grid.ode_coefficient(1, -0.3, 2.0, 2), 2.0 * (-0.25 + 0.3))
    assert grid.derivative_step(3, 0.1) == 0.1


@pytest.mark.grid
@pytest.mark.quick
def test_uniform_boundary_values_and_cutoff():
    grid = UniformGrid(np.zeros(4))
    assert np.isclose(grid.boundary_value_far(3.0, 3, -0.5), math.exp(-3.0))
    assert np.isclose(grid.boundary_value_zero(0.1, 1, 2), 1e-3)
    assert np.isclose(grid.max_radius(-0.5), 323.0)
    assert grid.max_radius_index(-0.5) == 323
    assert grid.max_radius_index(-0.5, 0.5) == 646


@pytest.mark.grid
@pytest.mark.quick
def test_potential_array_is_shared_not_copied():
    v = np.zeros(5)
    grid = UniformGrid(v)
    v[2] = -3.0
    assert grid.effective_potential(0, 1.0, 2) == -3.0


def _exp_grid(num_points=1001, r_max=40.0, delta=0.01):
    return ExponentialGrid(np.zeros(num_points), r_max=r_max, delta=delta, num_points=num_points)


@pytest.mark.grid
@pytest.mark.quick
def test_exponential_positions_monotonic_from_origin():
    grid = _exp_grid()
    r = grid.positions(grid.num_points)
    assert r[0] == 0.0
    assert grid.position(0) == 0.0
    assert np.all(np.diff(r) > 0)
    assert np.isclose(r[-1], 40.0, rtol=1e-12)
    assert np.isclose(grid.position(500), r[500], rtol=1e-14)


@pytest.mark.grid
@pytest.mark.quick
def test_exponential_cached_constants():
    grid = _exp_grid(num_points=11, r_max=2.0, delta=0.1)
    rp = 2.0 / (math.exp(1.0) - 1.0)
    assert np.isclose(grid.rp, rp)
    assert np.isclose(grid.two_delta, 0.2)
    assert np.isclose(grid.rp2_delta2, rp * rp * 0.01)
    assert np.isclose(grid.delta2_over_4, 0.0025)


@pytest.mark.grid
@pytest.mark.quick
def test_exponential_ode_coefficient_uses_true_position():
    v = -np.arange(11, dtype=float)
    grid = ExponentialGrid(v, r_max=2.0, delta=0.1, num_points=11)
    i, l, E = 4, 1, -0.7
    r = grid.position(i)
    v_eff = v[i] + 1.0 / (r * r)
    # 传入的 position 参数被忽略
    assert np.isclose(grid.effective_potential(l, 123.0, i), v_eff)
    expected = 2.0 * (v_eff - E) * grid.rp2_delta2 * math.exp(2 * i * 0.1) + 0.0025
    assert np.isclose(grid.ode_coefficient(l, E, 4.0, i), expected)


@pytest.mark.grid
@pytest.mark.quick
def test_exponential_boundary_values():
    grid = _exp_grid()
    i = 700
    r = grid.position(i)
    assert np.isclose(grid.boundary_value_far(float(i), i, -0.5), math.exp(-r))
    assert np.isclose(grid.boundary_value_zero(1.0, 1, 1), grid.position(1) ** 2 * math.exp(-0.005))


@pytest.mark.grid
@pytest.mark.quick
def test_exponential_max_radius_index_inverts_mapping():
    grid = _exp_grid()
    E = -0.5
    idx = grid.max_radius_index(E)
    assert np.isclose(grid.max_radius(E), 15.0)
    assert grid.position(idx) <= 15.0 < grid.position(idx + 1)


@pytest.mark.grid
@pytest.mark.quick
def test_exponential_derivative_step_is_local_spacing():
    grid = _exp_grid()
    for i in (1, 10, 500, 1000):
        assert np.isclose(grid.derivative_step(i, 1.0), grid.position(i) - grid.position(i - 1), rtol=1e-10)


@pytest.mark.grid
@pytest.mark.quick
def test_exponential_to_radial_undoes_transform():
    grid = _exp_grid(num_points=5, r_max=1.0, delta=0.2)
    v = np.ones(5)
    assert np.allclose(grid.to_radial(v), np.exp(0.1 * np.arange(5)))


@pytest.mark.grid
@pytest.mark.quick
@pytest.mark.parametrize(
    "kwargs",
    [
        dict(r_max=10.0, delta=0.01, num_points=1),
        dict(r_max=10.0, delta=0.0, num_points=100),
        dict(r_max=-1.0, delta=0.01, num_points=100),
    ],
)
def test_exponential_rejects_bad_parameters(kwargs):
    with pytest.raises(ValueError):
        ExponentialGrid(np.zeros(100), **kwargs)


@pytest.mark.grid
@pytest.mark.quick
def test_zero_energy_has_unbounded_cutoff():
    uniform = UniformGrid(np.zeros(4))
    exponential = _exp_grid()
    for grid in (uniform, exponential):
        assert math.isinf(grid.max_radius(0.0))
        with pytest.raises(ValueError):
            grid.max_radius_index(0.0)
    # 远端边界值在 E=0 时退化为 1
    assert uniform.boundary_value_far(40.0, 4096, 0.0) == 1.0
