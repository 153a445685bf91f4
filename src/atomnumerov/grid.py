r"""径向网格
============

Numerov 求解器所用的两种径向网格：

- :class:`UniformGrid`：等间距网格，位置 :math:`r_i = i h`；
- :class:`ExponentialGrid`：指数网格 :math:`r_i = R_p(e^{i\delta} - 1)`，
  核附近加密、远端稀疏。

两类网格提供相同的方法集合（有效势、ODE 系数、远端/近核边界值、截断半径与索引、
导数步长），:class:`atomnumerov.numerov.NumerovSolver` 对二者一视同仁。

径向方程（原子单位）：

.. math::
    u''(r) = 2\left[V(r) + \frac{\ell(\ell+1)}{2r^2} - E\right] u(r).
"""

from __future__ import annotations

import math
from typing import Union

import numpy as np

from .constants import EXPONENTIAL_FAR_CUTOFF, UNIFORM_FAR_CUTOFF
from .potential import Potential, as_potential

__all__ = [
    "trapezoid_weights",
    "UniformGrid",
    "ExponentialGrid",
    "RadialGrid",
]


def trapezoid_weights(r: np.ndarray) -> np.ndarray:
    r"""为给定单调递增的径向网格计算梯形积分权重。

    .. math::
        \int_{r_0}^{r_{N-1}} f(r)\,\mathrm{d}r \approx \sum_{i=0}^{N-1} w_i f(r_i)

    端点权重为半步长，内部点为左右间距的平均值。

    Parameters
    ----------
    r : numpy.ndarray
        单调递增的径向坐标数组，要求 :math:`r_i < r_{i+1}`。

    Returns
    -------
    w : numpy.ndarray
        梯形积分权重。
    """
    if r.ndim != 1:
        raise ValueError("r 必须是一维数组")
    if np.any(np.diff(r) <= 0):
        raise ValueError("r 必须严格单调递增")
    n = r.size
    w = np.empty_like(r, dtype=float)
    if n == 1:
        w[0] = 0.0
        return w
    dr = np.diff(r)
    w[0] = 0.5 * dr[0]
    w[1:-1] = 0.5 * (dr[1:] + dr[:-1])
    w[-1] = 0.5 * dr[-1]
    return w


class UniformGrid:
    r"""等间距径向网格。

    索引 ``i`` 对应位置 :math:`r_i = i h`（单位步长时 :math:`r_i = i`），
    势能 ``potential[i]`` 即 :math:`V(r_i)`。

    Parameters
    ----------
    potential : Potential or array_like
        按索引采样的外势。
    """

    def __init__(self, potential: Potential | np.ndarray) -> None:
        self.potential = as_potential(potential)

    def position(self, index: int, step: float = 1.0) -> float:
        return index * step

    def positions(self, count: int, step: float = 1.0) -> np.ndarray:
        return np.arange(count, dtype=float) * step

    def effective_potential(self, l: int, position: float, index: int) -> float:
        r""":math:`V_i + \ell(\ell+1)/(2r^2)`。"""
        return self.potential(index) + l * (l + 1.0) / (position * position) * 0.5

    def ode_coefficient(self, l: int, E: float, position: float, index: int) -> float:
        """Numerov 递推中的局部系数 :math:`f = 2(V_{\\mathrm{eff}} - E)`。"""
        return 2.0 * (self.effective_potential(l, position, index) - E)

    def boundary_value_far(self, position: float, index: int, E: float) -> float:
        r"""远端渐近值 :math:`e^{-r\sqrt{2|E|}}`。

        仅为近似的衰减形式，未与解析解逐点核对；只影响两个起始点的比值。
        """
        return math.exp(-position * math.sqrt(2.0 * abs(E)))

    def boundary_value_zero(self, position: float, index: int, l: int) -> float:
        r"""近核正则解 :math:`r^{\ell+1}`。"""
        return position ** (l + 1)

    def max_radius(self, E: float) -> float:
        r"""经验截断半径 :math:`323/\sqrt{2|E|}`；``E == 0`` 时为无穷大（不截断）。"""
        if E == 0.0:
            return math.inf
        return UNIFORM_FAR_CUTOFF / math.sqrt(2.0 * abs(E))

    def max_radius_index(self, E: float, step: float = 1.0) -> int:
        radius = self.max_radius(E)
        if math.isinf(radius):
            raise ValueError(f"E={E} 时截断半径为无穷大，无法给出外端索引")
        return int(radius / step)

    def derivative_step(self, index: int, h: float) -> float:
        return h

    def to_radial(self, values: np.ndarray) -> np.ndarray:
        """Numerov 变量即 :math:`u(r)`，原样返回。"""
        return np.asarray(values, dtype=float)


class ExponentialGrid:
    r"""指数径向网格 :math:`r_i = R_p(e^{i\delta} - 1)`。

    在索引变量 :math:`i` 上做变换 :math:`u = e^{i\delta/2} v` 后，方程变为无一阶导数项的

    .. math::
        v''(i) = \left[2(V_{\mathrm{eff}} - E) R_p^2 \delta^2 e^{2i\delta} + \frac{\delta^2}{4}\right] v(i),

    可直接使用单位步长的 Numerov 递推。:math:`\delta^2/4` 是非均匀网格的雅可比修正。

    Parameters
    ----------
    potential : Potential or array_like
        按索引采样的外势，``potential[i]`` 对应 :math:`V(r_i)`。
    r_max : float
        最外点半径 :math:`r_{N-1}`。
    delta : float
        指数参数 :math:`\delta > 0`。
    num_points : int
        网格点数 :math:`N \ge 2`。

    Notes
    -----
    :math:`R_p` 与三个导出常量 :math:`2\delta`、:math:`R_p^2\delta^2`、:math:`\delta^2/4`
    在构造时计算并在网格生命周期内保持不变。
    """

    def __init__(self, potential: Potential | np.ndarray, r_max: float, delta: float, num_points: int) -> None:
        if num_points < 2:
            raise ValueError("num_points 必须 >= 2")
        if delta <= 0:
            raise ValueError("delta 必须 > 0")
        if r_max <= 0:
            raise ValueError("r_max 必须 > 0")

        self.potential = as_potential(potential)
        self.delta = float(delta)
        self.r_max = float(r_max)
        self.num_points = int(num_points)

        # 由 r(N-1) = r_max 反推 Rp
        self.rp = self.r_max / (math.exp((self.num_points - 1) * self.delta) - 1.0)
        self.two_delta = 2.0 * self.delta
        self.rp2_delta2 = self.rp * self.rp * self.delta * self.delta
        self.delta2_over_4 = self.delta * self.delta / 4.0

    def position(self, index: int, step: float = 1.0) -> float:
        return self.rp * (math.exp(index * self.delta) - 1.0)

    def positions(self, count: int, step: float = 1.0) -> np.ndarray:
        j = np.arange(count, dtype=float)
        return self.rp * (np.exp(j * self.delta) - 1.0)

    def effective_potential(self, l: int, position: float, index: int) -> float:
        # 传入的 position 是索引坐标，这里改用真实半径
        r = self.position(index)
        return self.potential(index) + l * (l + 1.0) / (r * r) * 0.5

    def ode_coefficient(self, l: int, E: float, position: float, index: int) -> float:
        v_eff = self.effective_potential(l, position, index)
        return 2.0 * (v_eff - E) * self.rp2_delta2 * math.exp(index * self.two_delta) + self.delta2_over_4

    def boundary_value_far(self, position: float, index: int, E: float) -> float:
        return math.exp(-self.position(index) * math.sqrt(2.0 * abs(E)))

    def boundary_value_zero(self, position: float, index: int, l: int) -> float:
        r"""近核正则解 :math:`r^{\ell+1}` 换算到变量 :math:`v = u e^{-i\delta/2}`。"""
        return self.position(index) ** (l + 1) * math.exp(-index * self.delta * 0.5)

    def max_radius(self, E: float) -> float:
        r"""经验截断半径 :math:`15/\sqrt{2|E|}`；``E == 0`` 时为无穷大。"""
        if E == 0.0:
            return math.inf
        return EXPONENTIAL_FAR_CUTOFF / math.sqrt(2.0 * abs(E))

    def max_radius_index(self, E: float, step: float = 1.0) -> int:
        """截断半径经逆映射 :math:`i = \\ln(r/R_p + 1)/\\delta` 得到的索引（与步长无关）。"""
        radius = self.max_radius(E)
        if math.isinf(radius):
            raise ValueError(f"E={E} 时截断半径为无穷大，无法给出外端索引")
        return int(math.log(radius / self.rp + 1.0) / self.delta)

    def derivative_step(self, index: int, h: float) -> float:
        r"""局部间距 :math:`r_i - r_{i-1} = R_p e^{i\delta}(1 - e^{-\delta})`。"""
        return self.rp * math.exp(index * self.delta) * (1.0 - math.exp(-self.delta))

    def to_radial(self, values: np.ndarray) -> np.ndarray:
        r"""将 Numerov 变量 :math:`v_i` 换回 :math:`u(r_i) = e^{i\delta/2} v_i`。"""
        v = np.asarray(values, dtype=float)
        j = np.arange(v.shape[0], dtype=float)
        return v * np.exp(0.5 * self.delta * j)


RadialGrid = Union[UniformGrid, ExponentialGrid]
