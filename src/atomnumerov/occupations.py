from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from .aufbau import Subshell, get_subshells

__all__ = [
    "Spin",
    "OrbitalSpec",
    "spin_channels",
    "default_occupations",
]

Spin = Literal["up", "down"]


@dataclass(frozen=True)
class OrbitalSpec:
    r"""轨道占据信息（径向通道）

    Attributes
    ----------
    l : int
        角动量量子数 :math:`\ell`。
    n_index : int
        同一 :math:`\ell` 通道内的径向量子数索引，即径向节点数
        :math:`n - \ell - 1`（0 表示 1s/2p/3d 等该通道的最低态）。
        可直接作为 :meth:`NumerovSolver.count_nodes` 的目标节点数。
    spin : {"up", "down"}
        自旋通道。
    f_per_m : float
        每个 :math:`m` 的分数占据；该通道总电子数为 :math:`(2\ell+1) f`。
    label : str
        人类可读的标签（如 "3d_up"）。
    """

    l: int
    n_index: int
    spin: Spin
    f_per_m: float
    label: str

    @property
    def electrons(self) -> float:
        return (2 * self.l + 1) * self.f_per_m


def spin_channels(subshells: Iterable[Subshell]) -> list[OrbitalSpec]:
    """将子壳层序列拆分为自旋通道（Hund 规则，球对称平均）。

    满壳层拆为两个 ``f_per_m=1`` 的通道；开壳层先填自旋向上，
    至多 :math:`2\\ell+1` 个电子，余下进入自旋向下。

    Parameters
    ----------
    subshells : iterable of Subshell
        占据子壳层，通常来自 :func:`atomnumerov.aufbau.get_subshells`。

    Returns
    -------
    list[OrbitalSpec]
        保持输入顺序的自旋通道列表；占据为 0 的子壳层被跳过。
    """
    occ: list[OrbitalSpec] = []
    for sub in subshells:
        if sub.nr_electrons <= 0:
            continue
        degeneracy = 2 * sub.l + 1
        n_index = sub.n - sub.l
        n_up = min(sub.nr_electrons, degeneracy)
        n_down = sub.nr_electrons - n_up
        occ.append(OrbitalSpec(l=sub.l, n_index=n_index, spin="up",
                               f_per_m=n_up / degeneracy, label=f"{sub.label}_up"))
        if n_down > 0:
            occ.append(OrbitalSpec(l=sub.l, n_index=n_index, spin="down",
                                   f_per_m=n_down / degeneracy, label=f"{sub.label}_down"))
    return occ


def default_occupations(Z: int) -> list[OrbitalSpec]:
    """返回原子基态的默认自旋通道占据（球对称平均）。

    Notes
    -----
    - 子壳层顺序与例外（Cr、Cu、Pd、镧系/锕系等）完全沿用 :func:`get_subshells`；
    - 示例：
      - H (Z=1): 1s¹ (自旋向上)
      - C (Z=6): 1s² 2s² 2p² (2p: ↑↑, m 平均)
      - Cr (Z=24): [Ar] 4s¹ 3d⁵（均为自旋向上）
    """
    return spin_channels(get_subshells(Z))
