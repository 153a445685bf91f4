r"""Numerov 径向求解器
====================

在 :mod:`atomnumerov.grid` 的网格上用 Numerov 三点递推积分径向方程
:math:`u'' = f u`，为外部本征值搜索（打靶/二分）提供三种基本操作：

- :meth:`NumerovSolver.count_nodes`：向内积分并计数节点；
- :meth:`NumerovSolver.solution_at_origin`：向内积分到原点，返回外推值（作为根寻找的目标函数）；
- :meth:`NumerovSolver.matched_solution`：内外双向积分并在匹配点拼接，返回完整波函数。

递推形式（:math:`w = (1 - h^2 f/12) u`）：

.. math::
    w_{i-1} = 2 w_i - w_{i+1} + h^2 f_i u_i, \qquad u_i = \frac{w_i}{1 - h^2 f_i / 12}.

积分范围有两种约定，由 :class:`IntegrationMode` 显式指定：

- ``UNIT_STEP``：单位步长，外端索引取 ``min(steps, grid.max_radius_index(E))``；
- ``PHYSICAL_RANGE``：步长 ``extent/steps``，外端半径截断到 ``grid.max_radius(E)``，
  再由截断后的半径重新推出外端索引。仅适用于等间距网格；``E == 0`` 时不截断。

步长及其导出量只作为每次调用的局部量存在，求解器实例不保存任何调用间状态。
"""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple

import numpy as np

from .constants import DEFAULT_MATCH_INDEX, RUNAWAY_THRESHOLD
from .grid import ExponentialGrid, RadialGrid
from .logging_config import get_logger

__all__ = [
    "IntegrationMode",
    "NumerovSolver",
]

logger = get_logger(__name__)


class IntegrationMode(Enum):
    """积分范围约定。"""

    UNIT_STEP = "unit_step"
    PHYSICAL_RANGE = "physical_range"


class _Steps(NamedTuple):
    h: float
    h2: float
    h2p12: float
    start: float
    last: int


class NumerovSolver:
    """Numerov 打靶求解器。

    Parameters
    ----------
    grid : UniformGrid or ExponentialGrid
        提供有效势、ODE 系数、边界值与截断半径的网格。同一网格可被多个求解器共享。

    Notes
    -----
    所有求解操作对相同参数、未改动的势能给出逐位相同的结果。
    """

    def __init__(self, grid: RadialGrid) -> None:
        self.grid = grid

    # ------------------------------------------------------------------ 公共准备

    def _prepare(self, extent: float | None, E: float, steps: int, mode: IntegrationMode) -> _Steps:
        """计算本次调用的步长与外端索引。"""
        if steps < 1:
            raise ValueError("steps 必须 >= 1")

        if mode is IntegrationMode.UNIT_STEP:
            last = min(int(steps), self.grid.max_radius_index(E, 1.0))
            setup = _Steps(1.0, 1.0, 1.0 / 12.0, float(last), last)
        elif mode is IntegrationMode.PHYSICAL_RANGE:
            if isinstance(self.grid, ExponentialGrid):
                # 指数网格的变换方程只在索引变量的单位步长下成立
                raise ValueError("ExponentialGrid 只支持 IntegrationMode.UNIT_STEP")
            if extent is None or extent <= 0:
                raise ValueError("PHYSICAL_RANGE 模式要求 extent > 0")
            h = extent / steps
            start = min(extent, self.grid.max_radius(E))
            setup = _Steps(h, h * h, h * h / 12.0, start, int(start / h))
        else:
            raise ValueError(f"未知的积分模式: {mode!r}")

        if setup.last < 2:
            raise ValueError(f"积分范围过短：外端索引 {setup.last} < 2（E={E}）")
        if setup.last >= len(self.grid.potential):
            raise ValueError(
                f"势能采样长度 {len(self.grid.potential)} 不足以覆盖外端索引 {setup.last}"
            )
        return setup

    def _inward_start(self, l: int, E: float, s: _Steps) -> tuple[float, float, float, float, float]:
        """外端两点的初值，返回 (u_last, u_{last-1}, w_last, w_{last-1}, f_{last-1})。"""
        grid = self.grid
        position = s.start
        u_last = grid.boundary_value_far(position, s.last, E)
        f = grid.ode_coefficient(l, E, position, s.last)
        w_last = (1.0 - s.h2p12 * f) * u_last

        position -= s.h
        u = grid.boundary_value_far(position, s.last - 1, E)
        f = grid.ode_coefficient(l, E, position, s.last - 1)
        w = (1.0 - s.h2p12 * f) * u
        return u_last, u, w_last, w, f

    # ------------------------------------------------------------------ 节点计数

    def count_nodes(
        self,
        extent: float | None,
        l: int,
        E: float,
        steps: int,
        node_limit: int,
        mode: IntegrationMode = IntegrationMode.PHYSICAL_RANGE,
    ) -> int:
        r"""从外端向原点积分，统计波函数变号次数。

        Parameters
        ----------
        extent : float or None
            积分外端半径（``UNIT_STEP`` 模式下忽略）。
        l : int
            角动量量子数 :math:`\ell`。
        E : float
            试探能量（Hartree，束缚态 :math:`E<0`）。
        steps : int
            步数；``UNIT_STEP`` 模式下即外端索引上限。
        node_limit : int
            节点数上限，超过即提前返回。
        mode : IntegrationMode
            积分范围约定。指数网格必须用 ``UNIT_STEP``，``UNIT_STEP`` 下 ``E`` 不能为 0。

        Returns
        -------
        int
            节点数。

        Raises
        ------
        ValueError
            积分模式与网格不符，或外端索引不足 2、超出势能采样长度。

        Notes
        -----
        以下情形提前返回当前计数：解溢出为无穷；节点数超过 ``node_limit``；
        越过经典转折点进入允许区后有效势再次高于 E（已回到内侧禁区）。
        完整积分到索引 1 时，再用 :math:`u_0 = u_1(2 + h^2 f_1) - u_2` 外推原点值补一次变号检查。
        """
        s = self._prepare(extent, E, steps, mode)
        grid = self.grid
        h, h2, h2p12 = s.h, s.h2, s.h2p12

        prev_solution, solution, w_prev, w, f = self._inward_start(l, E, s)

        positive = solution > 0
        nodes = 0
        allowed_seen = False

        for i in range(s.last - 2, 0, -1):
            w_next = 2.0 * w - w_prev + h2 * solution * f
            position = h * i
            w_prev = w
            w = w_next

            f = grid.ode_coefficient(l, E, position, i)
            prev_solution = solution
            solution = w / (1.0 - h2p12 * f)

            if math.isinf(solution):
                logger.debug("count_nodes: 索引 %d 处溢出，节点数 %d", i, nodes)
                return nodes

            if (solution > 0) != positive:
                nodes += 1
                if nodes > node_limit:
                    return nodes
                positive = not positive

            # 经典转折点判据
            if grid.effective_potential(l, position, i) <= E:
                allowed_seen = True
            elif allowed_seen:
                return nodes

        if nodes <= node_limit:
            solution = solution * (2.0 + h2 * f) - prev_solution
            if (solution > 0) != positive:
                nodes += 1

        return nodes

    # ------------------------------------------------------------------ 原点值

    def solution_at_origin(
        self,
        extent: float | None,
        l: int,
        E: float,
        steps: int,
        mode: IntegrationMode = IntegrationMode.PHYSICAL_RANGE,
    ) -> float:
        """从外端向原点积分并返回原点处的外推值。

        真实本征态满足正则边界条件 :math:`u(0)=0`，因此该值可直接作为
        外部根寻找（二分、Brent 等）的目标函数。不做节点计数与提前退出。
        """
        s = self._prepare(extent, E, steps, mode)
        grid = self.grid
        h, h2, h2p12 = s.h, s.h2, s.h2p12

        prev_solution, solution, w_prev, w, f = self._inward_start(l, E, s)

        for i in range(s.last - 2, 0, -1):
            w_next = 2.0 * w - w_prev + h2 * solution * f
            position = h * i
            w_prev = w
            w = w_next

            f = grid.ode_coefficient(l, E, position, i)
            prev_solution = solution
            solution = w / (1.0 - h2p12 * f)

        return solution * (2.0 + h2 * f) - prev_solution

    # ------------------------------------------------------------------ 匹配法

    def matched_solution(
        self,
        extent: float | None,
        l: int,
        E: float,
        steps: int,
        mode: IntegrationMode = IntegrationMode.PHYSICAL_RANGE,
    ) -> tuple[np.ndarray, int]:
        r"""内外双向积分并在匹配点拼接，返回完整的径向解。

        Parameters
        ----------
        extent, l, E, steps, mode
            同 :meth:`count_nodes`。

        Returns
        -------
        psi : numpy.ndarray
            长度 ``steps + 1`` 的解，``psi[0] = 0``；外端截断之后的索引补零。
            指数网格上为变换变量 :math:`v`，可用 ``grid.to_radial`` 换回 :math:`u`。
        match_index : int
            匹配点索引。

        Notes
        -----
        - 向内分支在首次出现 :math:`\psi_i < \psi_{i+1}`（开始下降）或 :math:`|\psi_i| > 10^{50}`
          （失控增长）的索引处停止，该索引即匹配点（缺省为 2）。
        - 向外分支以 ``psi[1] = boundary_value_zero`` 起步积分到匹配点；
          匹配点以外的向内分支乘以两支在匹配点的比值，使解连续。
        - 向内分支在匹配点恰为 0 时无法定标，此时保留未缩放的向内分支并记录警告；
          匹配点接近节点时比值本身数值不稳定。
        - 比值取向外积分之前的向内值，匹配点为 1 时不受 ``psi[1]`` 被覆盖的影响。
        """
        s = self._prepare(extent, E, steps, mode)
        grid = self.grid

        psi = np.zeros(steps + 1, dtype=float)

        # 截断后按实际外端重新确定步长
        last = s.last
        h = s.start / last
        h2 = h * h
        h2p12 = h2 / 12.0
        s = s._replace(h=h, h2=h2, h2p12=h2p12)

        # 向内分支
        u_last, solution, w_prev, w, f = self._inward_start(l, E, s)
        psi[last] = u_last
        psi[last - 1] = solution

        match_index = DEFAULT_MATCH_INDEX
        for i in range(last - 2, 0, -1):
            w_next = 2.0 * w - w_prev + h2 * solution * f
            position = h * i
            w_prev = w
            w = w_next

            f = grid.ode_coefficient(l, E, position, i)
            solution = w / (1.0 - h2p12 * f)
            psi[i] = solution

            if solution < psi[i + 1] or abs(solution) > RUNAWAY_THRESHOLD:
                match_index = i
                break

        # 向外分支会覆盖 psi[1]，匹配点可能恰为 1，先记下向内分支的值
        inward = psi[match_index]

        # 向外分支
        psi[0] = 0.0
        w_prev = 0.0
        position = h
        solution = grid.boundary_value_zero(position, 1, l)
        psi[1] = solution
        f = grid.ode_coefficient(l, E, position, 1)
        w = (1.0 - h2p12 * f) * solution

        for i in range(2, match_index):
            w_next = 2.0 * w - w_prev + h2 * solution * f
            position = h * i
            w_prev = w
            w = w_next

            f = grid.ode_coefficient(l, E, position, i)
            solution = w / (1.0 - h2p12 * f)
            psi[i] = solution

        w = 2.0 * w - w_prev + h2 * solution * f
        position = h * match_index
        f = grid.ode_coefficient(l, E, position, match_index)
        solution = w / (1.0 - h2p12 * f)

        psi[match_index] = solution
        if inward == 0.0:
            logger.warning("matched_solution: 匹配点 %d 处向内分支为 0，未缩放（E=%g, l=%d）", match_index, E, l)
        else:
            psi[match_index + 1 : last + 1] *= solution / inward

        logger.debug("matched_solution: E=%g l=%d 外端索引 %d 匹配点 %d", E, l, last, match_index)
        return psi, match_index
