from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NumericsConfig:
    rel_tol: float = 1e-10  # relative dt tolerance of threshold bisection
    max_iter: int = 200
    n_modes: int = 721  # Fourier modes sampled on [0, pi] by stability searches
    growth_tol: float = 1e-12  # |G| <= 1 + growth_tol counts as stable

    def __post_init__(self) -> None:
        if self.rel_tol <= 0:
            raise ValueError("rel_tol must be > 0")
        if self.max_iter <= 0:
            raise ValueError("max_iter must be > 0")
        if self.n_modes < 3:
            raise ValueError("n_modes must be >= 3")
        if self.growth_tol < 0:
            raise ValueError("growth_tol must be >= 0")


DEFAULT_NUMERICS: NumericsConfig = NumericsConfig()
