from __future__ import annotations

from collections.abc import Callable

# typing only
type ScalarFn = Callable[[float], float]
type KernelFn = Callable[[float, float], float]  # K(x, t), also called on meshgrids
