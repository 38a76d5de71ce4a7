from dataclasses import dataclass

from ..tridiag import Tridiag


@dataclass(frozen=True, slots=True)
class ThetaSystem:
    A: Tridiag  # interior system matrix for u^{n+1}
    B: Tridiag  # interior matrix applied to u^{n}
