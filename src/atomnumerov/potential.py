from __future__ import annotations

import numpy as np

__all__ = ["Potential", "as_potential"]


class Potential:
    r"""按网格索引取值的势能采样 :math:`V_i`（Hartree）。

    数组由调用方持有，本类只读不写、不做插值；调用方在两次求解之间更新数组
    （例如 SCF 迭代），新的取值会直接生效。长度至少为求解中用到的最大索引加一，
    可用网格的 ``max_radius_index`` 预先估计。

    Parameters
    ----------
    values : array_like
        一维势能采样，第 ``i`` 个元素对应网格索引 ``i``。
    """

    def __init__(self, values) -> None:
        arr = np.asarray(values, dtype=float)
        if arr.ndim != 1:
            raise ValueError("势能采样必须是一维数组")
        self.values = arr

    def __call__(self, index: int) -> float:
        return float(self.values[index])

    def __len__(self) -> int:
        return self.values.shape[0]


def as_potential(values) -> Potential:
    """若已是 :class:`Potential` 则原样返回，否则包装为 :class:`Potential`。"""
    if isinstance(values, Potential):
        return values
    return Potential(values)
