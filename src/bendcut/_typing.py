from typing import Any, Callable, Protocol

import numpy as np

from bendcut.solution import Result
from bendcut.util import (
    ObjSense,
    Sense,
    SolveStatus,
    SubproblemOutcome,
    Terms,
    VarType,
)


class LinearProgram(Protocol):
    """Capabilities the Benders core needs from a solver

    ``terms`` arguments are sequences of ``(coefficient, variable)`` pairs, where
    the variables are the handles returned by ``add_var``.
    """

    def add_var(
        self,
        lb: float = 0.0,
        ub: float = float("inf"),
        vtype: VarType = VarType.CONTINUOUS,
        name: str = "",
    ) -> Any: ...
    def add_constr(self, terms: Terms, sense: Sense, rhs: float) -> Any: ...
    def set_objective(
        self, terms: Terms, constant: float = 0.0, sense: ObjSense = ObjSense.MINIMIZE
    ) -> None: ...
    def solve(self) -> SolveStatus: ...
    def primal_value(self, var: Any) -> float: ...
    def dual_value(self, constr: Any) -> float: ...
    def ray_value(self, var: Any) -> float: ...
    def objective_value(self) -> float: ...
    @property
    def num_constrs(self) -> int: ...
    def register_lazy_callback(self, fn: Callable[[], None]) -> None: ...
    def candidate_value(self, var: Any) -> float: ...
    def submit_lazy_constr(self, terms: Terms, sense: Sense, rhs: float) -> None: ...
    def terminate(self) -> None: ...
    def close(self) -> None: ...


class Subproblem(Protocol):
    def resolve_for(self, x: np.ndarray) -> SubproblemOutcome: ...
    def second_stage(self) -> np.ndarray: ...
    def close(self) -> None: ...


class Framework(Protocol):
    def solve(self, *args, **kwargs) -> Result: ...
