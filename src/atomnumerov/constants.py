r"""经验常量集中维护
====================

集中维护壳层填充与 Numerov 积分所用的经验常量，便于校准与统一管理。

说明：
- 远端截断半径 :math:`r_c = C/\sqrt{2|E|}` 中的系数 :math:`C` 按网格类型分别取值，
  线性网格取较宽松的 323，指数网格取 15；
- 匹配法向内积分时，若解的模超过 ``RUNAWAY_THRESHOLD`` 即视为失控增长并就地匹配；
- 壳层组（:math:`n+l`，:math:`n` 从 0 计）上限 10 覆盖全部已知元素。
"""

from __future__ import annotations

# 远端截断系数（原子单位）
UNIFORM_FAR_CUTOFF = 323.0
EXPONENTIAL_FAR_CUTOFF = 15.0

# 匹配法向内分支的失控阈值
RUNAWAY_THRESHOLD = 1e50

# 匹配点缺省位置（向内积分未触发停止条件时）
DEFAULT_MATCH_INDEX = 2

# Aufbau 外层循环上限：壳层组索引 < SHELL_GROUP_CEILING
SHELL_GROUP_CEILING = 10

# 已命名元素的最大原子序数
MAX_SUPPORTED_Z = 118

# 日志级别环境变量
LOG_LEVEL_ENV = "ATOMNUMEROV_LOG_LEVEL"
