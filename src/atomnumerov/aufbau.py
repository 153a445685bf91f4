r"""Aufbau 壳层填充
==================

按 Madelung 规则（:math:`n+l` 递增，组内 :math:`n` 递增）枚举占据的子壳层，
并施加过渡金属、镧系与锕系的已知例外。

约定：子壳层主量子数 ``n`` 从 0 计（``n=0`` 即 K 壳层），
光谱学主量子数为 ``n + 1``。在该约定下候选条件 ``l <= n`` 即物理条件
:math:`\ell \le n_{\mathrm{p}} - 1`，例外表中的 ``n`` 均按此约定给出。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .constants import MAX_SUPPORTED_Z, SHELL_GROUP_CEILING
from .logging_config import get_logger

__all__ = [
    "Subshell",
    "get_subshells",
    "configuration_string",
    "validate_atomic_number",
]

logger = get_logger(__name__)

_L_LETTERS = "spdfghik"

# 一个 s 电子转移到 d 子壳层的元素：Cr, Cu, Nb, Mo, Ru, Rh, Ag, Pt, Au
_S_TO_D_TRANSFER = frozenset({24, 29, 41, 42, 44, 45, 47, 78, 79})
# 4f 失去一个电子（进入 5d）：La, Ce, Gd
_LANTHANIDE_F_LOSS = frozenset({57, 58, 64})
# 5f 全部让给 6d：Ac, Th
_ACTINIDE_F_EMPTY = frozenset({89, 90})
# 5f 失去一个电子（进入 6d）：Pa, U, Np, Cm
_ACTINIDE_F_LOSS = frozenset({91, 92, 93, 96})


@dataclass
class Subshell:
    r"""占据子壳层 :math:`(n, \ell)`。

    Attributes
    ----------
    n : int
        主量子数（从 0 计）。
    l : int
        角动量量子数 :math:`\ell`。
    nr_electrons : int
        占据电子数，范围 :math:`0..2(2\ell+1)`。
    energy : float
        能量估计（Hartree），由外部本征求解器回填，初值 0。

    Notes
    -----
    子壳层按 :math:`(n, \ell)` 字典序全序，可直接用于 ``sorted``。
    """

    n: int = 0
    l: int = 0
    nr_electrons: int = 0
    energy: float = 0.0

    def __lt__(self, other: "Subshell") -> bool:
        return (self.n, self.l) < (other.n, other.l)

    @property
    def principal(self) -> int:
        """光谱学主量子数 ``n + 1``。"""
        return self.n + 1

    @property
    def capacity(self) -> int:
        return 2 * (2 * self.l + 1)

    @property
    def is_full(self) -> bool:
        return self.nr_electrons == self.capacity

    @property
    def label(self) -> str:
        """光谱学标签，如 ``"4s"``、``"3d"``。"""
        return f"{self.principal}{_L_LETTERS[self.l]}"


def _shell_capacity(Z: int, n: int, l: int, assigned: int) -> int:
    """返回 (n, l) 子壳层在原子序数 Z 下的最终占据数（可能 <= 0）。"""
    nr_electrons = 2 * (2 * l + 1)

    if Z in _S_TO_D_TRANSFER and l == 0:
        if Z <= 29:
            donor = 3
        elif Z <= 47:
            donor = 4
        else:
            donor = 5
        if n == donor:
            nr_electrons -= 1
    elif Z == 46 and n == 4 and l == 0:
        # Pd: 5s 的两个电子都进入 4d
        nr_electrons -= 2

    nr_electrons = min(nr_electrons, Z - assigned)

    if l == 3:
        if Z in _LANTHANIDE_F_LOSS and n == 3:
            nr_electrons -= 1
        elif n == 4:
            if Z in _ACTINIDE_F_EMPTY:
                nr_electrons = 0
            elif Z in _ACTINIDE_F_LOSS:
                nr_electrons -= 1
    elif Z == 103 and n == 5 and l == 2:
        # Lr: 6d 的电子进入 7p
        nr_electrons = 0

    return nr_electrons


def get_subshells(Z: int) -> list[Subshell]:
    r"""返回原子序数 Z 的基态占据子壳层序列。

    Parameters
    ----------
    Z : int
        原子序数。

    Returns
    -------
    list[Subshell]
        按 :math:`n+l` 组递增、组内 :math:`n` 递增排列的占据子壳层；
        各子壳层占据数之和为 :math:`\min(Z, \text{可填充总数})`。

    Notes
    -----
    - 不做输入校验：``Z <= 0`` 返回空列表；超出壳层组上限时返回截断序列并记录警告。
      需要严格校验时请先调用 :func:`validate_atomic_number`。
    - 电子总数一旦等于 Z 立即停止，不再扫描后续壳层组。

    Examples
    --------
    >>> [s.label for s in get_subshells(24)][-2:]
    ['4s', '3d']
    """
    subshells: list[Subshell] = []
    assigned = 0

    for group in range(SHELL_GROUP_CEILING):
        for n in range(group + 1):
            l = group - n
            if l > n:
                continue

            nr_electrons = _shell_capacity(Z, n, l, assigned)
            if nr_electrons > 0:
                assigned += nr_electrons
                subshells.append(Subshell(n, l, nr_electrons))

            if assigned == Z:
                return subshells

    if Z > 0:
        logger.warning(
            "Z=%d 超出壳层组上限 %d：仅分配了 %d 个电子", Z, SHELL_GROUP_CEILING, assigned
        )
    return subshells


def configuration_string(subshells: Iterable[Subshell]) -> str:
    """将子壳层序列格式化为电子组态字符串，如 ``"1s2 2s2 2p6"``（保持给定顺序）。"""
    return " ".join(f"{s.label}{s.nr_electrons}" for s in subshells)


def validate_atomic_number(Z: int) -> int:
    """检查原子序数位于 ``1..MAX_SUPPORTED_Z``，否则抛出 ValueError。"""
    if not 1 <= Z <= MAX_SUPPORTED_Z:
        raise ValueError(f"Z={Z} 超出支持范围 (1-{MAX_SUPPORTED_Z})")
    return Z
