from __future__ import annotations

import numpy as np

from .grid import RadialGrid, trapezoid_weights

__all__ = [
    "trapz",
    "normalize_radial_u",
    "normalize_solution",
    "radial_derivative",
]


def trapz(y: np.ndarray, r: np.ndarray, w: np.ndarray | None = None) -> float:
    r"""使用梯形权重对函数进行一维数值积分。

    若提供 :data:`w`，则直接返回 :math:`\sum_i w_i y_i`；否则退化为
    :func:`numpy.trapezoid` 的行为（均匀或非均匀步长）。
    """
    if w is not None:
        if w.shape != y.shape:
            raise ValueError("w 与 y 的形状必须一致")
        return float(np.sum(w * y))
    return float(np.trapezoid(y, r))


def normalize_radial_u(u: np.ndarray, r: np.ndarray, w: np.ndarray) -> tuple[np.ndarray, float]:
    r"""将径向函数 :math:`u(r)` 归一化到 :math:`\int u^2\,dr=1`。

    Parameters
    ----------
    u : numpy.ndarray
        径向函数离散值 :math:`u(r_i)`。
    r : numpy.ndarray
        网格坐标 :math:`r_i`。
    w : numpy.ndarray
        梯形权重 :math:`w_i`。

    Returns
    -------
    u_norm : numpy.ndarray
        归一化后的函数值数组。
    norm : float
        原始函数的范数 :math:`\sqrt{\int u^2\,dr}`。

    Notes
    -----
    - 该归一化对应径向方程中 :math:`u(r)` 的标准内积，不包含体积分因子 :math:`4\pi r^2`。
    """
    if not (u.shape == r.shape == w.shape):
        raise ValueError("u, r, w 的形状必须一致")
    norm2 = trapz(u * u, r, w)
    norm = float(np.sqrt(max(norm2, 1e-300)))
    return u / norm, norm


def normalize_solution(psi: np.ndarray, grid: RadialGrid, step: float = 1.0) -> tuple[np.ndarray, np.ndarray, float]:
    r"""把 :meth:`NumerovSolver.matched_solution` 的输出换回 :math:`u(r)` 并归一化。

    Parameters
    ----------
    psi : numpy.ndarray
        Numerov 解（索引 0 为原点）。
    grid : UniformGrid or ExponentialGrid
        求解所用网格。
    step : float, optional
        等间距网格的物理步长（``PHYSICAL_RANGE`` 模式下为 ``extent/steps``），指数网格忽略。

    Returns
    -------
    r : numpy.ndarray
        各索引的径向坐标。
    u : numpy.ndarray
        归一化的 :math:`u(r_i)`。
    norm : float
        归一化前的范数。
    """
    r = grid.positions(psi.shape[0], step)
    u = grid.to_radial(psi)
    w = trapezoid_weights(r)
    u, norm = normalize_radial_u(u, r, w)
    return r, u, norm


def radial_derivative(values: np.ndarray, grid: RadialGrid, h: float = 1.0) -> np.ndarray:
    r"""用网格的局部间距做一阶后向差分 :math:`(y_i - y_{i-1})/\Delta r_i`。

    :math:`\Delta r_i` 取 ``grid.derivative_step(i, h)``；索引 0 沿用索引 1 的差商。
    """
    y = np.asarray(values, dtype=float)
    if y.ndim != 1 or y.size < 2:
        raise ValueError("values 必须是长度 >= 2 的一维数组")
    steps = np.array([grid.derivative_step(i, h) for i in range(1, y.size)])
    d = np.empty_like(y)
    d[1:] = np.diff(y) / steps
    d[0] = d[1]
    return d
