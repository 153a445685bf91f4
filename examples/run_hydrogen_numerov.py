"""类氢原子能级（Numerov 打靶 + 节点计数二分）

演示外部驱动如何使用 :class:`atomnumerov.NumerovSolver`：

1. 以节点计数二分，把能量收缩到目标节点数 ``n - l - 1`` 的区间；
2. 再以原点外推值的符号二分细化本征能；
3. 用匹配解得到归一化的 :math:`u(r)`。

运行示例：

    python -m examples.run_hydrogen_numerov --Z 1 --grid exp
"""
from __future__ import annotations

import argparse

import numpy as np

from atomnumerov import (
    ExponentialGrid,
    IntegrationMode,
    NumerovSolver,
    UniformGrid,
    configuration_string,
    get_subshells,
    normalize_solution,
)


def build_solver(args) -> tuple[NumerovSolver, float | None, int, IntegrationMode, float]:
    """构建网格与求解器，返回 (solver, extent, steps, mode, step)。"""
    if args.grid == "linear":
        h = args.rmax / args.n
        r = np.arange(args.n + 1) * h
        v = np.zeros(args.n + 1)
        v[1:] = -args.Z / r[1:]
        return NumerovSolver(UniformGrid(v)), args.rmax, args.n, IntegrationMode.PHYSICAL_RANGE, h
    elif args.grid == "exp":
        num_points = args.n + 1
        grid = ExponentialGrid(np.zeros(num_points), r_max=args.rmax, delta=args.delta, num_points=num_points)
        r = grid.positions(num_points)
        v = np.zeros(num_points)
        v[1:] = -args.Z / r[1:]
        grid = ExponentialGrid(v, r_max=args.rmax, delta=args.delta, num_points=num_points)
        return NumerovSolver(grid), None, args.n, IntegrationMode.UNIT_STEP, 1.0
    else:
        raise ValueError(f"不支持的网格类型: {args.grid}")


def _node_edge(solver, extent, steps, mode, l: int, nodes: int, a: float, b: float,
               max_iter: int = 60, tol: float = 1e-8) -> tuple[float, float]:
    """二分出节点数由 ``<= nodes`` 变为 ``> nodes`` 的能量区间 (a, b)。"""
    for _ in range(max_iter):
        c = 0.5 * (a + b)
        if solver.count_nodes(extent, l, c, steps, nodes + 1, mode=mode) > nodes:
            b = c
        else:
            a = c
        if abs(b - a) < tol:
            break
    return a, b


def find_level(solver, extent, steps, mode, l: int, nodes: int, e_lo: float, e_hi: float,
               max_iter: int = 100, tol: float = 1e-10) -> float:
    """在 [e_lo, e_hi] 内寻找节点数为 ``nodes`` 的本征能。

    要求 ``count_nodes(e_lo) < nodes``（nodes=0 时不作要求）且 ``count_nodes(e_hi) > nodes``。
    """
    # 节点数恰为 nodes 的能量窗口内，原点值只在本征能处变号
    lower = _node_edge(solver, extent, steps, mode, l, nodes - 1, e_lo, e_hi)[1] if nodes > 0 else e_lo
    upper = _node_edge(solver, extent, steps, mode, l, nodes, lower, e_hi)[0]

    a, b = lower, upper
    fa = solver.solution_at_origin(extent, l, a, steps, mode=mode)
    for _ in range(max_iter):
        c = 0.5 * (a + b)
        fc = solver.solution_at_origin(extent, l, c, steps, mode=mode)
        if abs(b - a) < tol:
            break
        if np.sign(fc) == np.sign(fa):
            a, fa = c, fc
        else:
            b = c
    return 0.5 * (a + b)


def main() -> None:
    parser = argparse.ArgumentParser(description="类氢原子 Numerov 能级")
    parser.add_argument("--Z", type=float, default=1.0)
    parser.add_argument("--grid", choices=["linear", "exp"], default="exp")
    parser.add_argument("--n", type=int, default=4000, help="步数")
    parser.add_argument("--rmax", type=float, default=80.0)
    parser.add_argument("--delta", type=float, default=0.002)
    parser.add_argument("--nmax", type=int, default=3)
    args = parser.parse_args()

    if float(args.Z).is_integer():
        print("Aufbau 组态:", configuration_string(get_subshells(int(args.Z))))

    solver, extent, steps, mode, step = build_solver(args)
    for n in range(1, args.nmax + 1):
        for l in range(n):
            exact = -args.Z ** 2 / (2.0 * n * n)
            # 窗口两端分别略深于 E_{n-1} 与 E_{n+1}
            e_prev = -args.Z ** 2 / (2.0 * (n - 1) ** 2) if n > 1 else 1.5 * exact
            e_next = -args.Z ** 2 / (2.0 * (n + 1) ** 2)
            E = find_level(solver, extent, steps, mode, l, n - l - 1, 1.01 * e_prev, 1.01 * e_next)
            psi, m = solver.matched_solution(extent, l, E, steps, mode=mode)
            _, u, _ = normalize_solution(psi, solver.grid, step)
            print(f"n={n} l={l}: E={E:.8f} Ha (精确 {exact:.8f})，匹配点 {m}，max|u|={np.max(np.abs(u)):.4f}")


if __name__ == "__main__":
    main()
