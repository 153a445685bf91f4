"""atomnumerov 包
=================

原子电子结构求解器的两个底层物理原语：

- Aufbau 壳层填充：按 Madelung 规则与已知例外给出占据子壳层序列
- 径向 Schrödinger 方程的 Numerov 解法：等间距/指数网格上的节点计数、原点外推值与内外匹配解

自洽势构造、本征值搜索循环、交换关联泛函与输出均由外部调用方负责。

注：本项目所有文档与注释均使用中文，Docstring 采用 Sphinx + NumPy 风格，公式使用 ``:math:`` 标记。
"""

from atomnumerov.aufbau import Subshell, configuration_string, get_subshells, validate_atomic_number
from atomnumerov.grid import ExponentialGrid, UniformGrid, trapezoid_weights
from atomnumerov.numerov import IntegrationMode, NumerovSolver
from atomnumerov.occupations import OrbitalSpec, default_occupations, spin_channels
from atomnumerov.potential import Potential
from atomnumerov.utils import normalize_radial_u, normalize_solution, radial_derivative, trapz

__all__ = [
    "Subshell",
    "get_subshells",
    "configuration_string",
    "validate_atomic_number",
    "Potential",
    "UniformGrid",
    "ExponentialGrid",
    "trapezoid_weights",
    "IntegrationMode",
    "NumerovSolver",
    "OrbitalSpec",
    "spin_channels",
    "default_occupations",
    "trapz",
    "normalize_radial_u",
    "normalize_solution",
    "radial_derivative",
]

__version__ = "0.1.0"
