import logging
from typing import Callable, List

import numpy as np

from bendcut._typing import LinearProgram
from bendcut._typing import Subproblem as SubproblemProtocol
from bendcut.errors import UnexpectedStatus
from bendcut.staging import ProblemData
from bendcut.util import (
    Cut,
    CutKind,
    MasterCandidate,
    ObjSense,
    OutcomeKind,
    Sense,
    SolveStatus,
    SubproblemOutcome,
    VarType,
)

DEFAULT_X_UB = 1e6
DEFAULT_T_UB = 1e6


class MasterProblem:
    """max t over integer x in [0, x_ub] and t <= t_ub, plus the cuts added so far"""

    def __init__(
        self,
        program: LinearProgram,
        data: ProblemData,
        x_ub: float = DEFAULT_X_UB,
        t_ub: float = DEFAULT_T_UB,
    ) -> None:
        self.program = program
        self.data = data
        self.x = [
            program.add_var(lb=0.0, ub=x_ub, vtype=VarType.INTEGER, name=f"x[{j}]")
            for j in range(data.num_first_stage)
        ]
        self.t = program.add_var(lb=-float("inf"), ub=t_ub, name="t")
        program.set_objective([(1.0, self.t)], sense=ObjSense.MAXIMIZE)
        self.cuts: List[Cut] = []

    def close(self) -> None:
        self.program.close()

    @property
    def num_constrs(self) -> int:
        return self.program.num_constrs

    def register_lazy_callback(self, fn: Callable[[], None]) -> None:
        self.program.register_lazy_callback(fn)

    def terminate(self) -> None:
        self.program.terminate()

    def optimize(self) -> SolveStatus:
        status = self.program.solve()
        logging.debug(f"master: status {status.name}")
        return status

    def get_candidate(self, status: SolveStatus) -> MasterCandidate:
        candidate = MasterCandidate(
            t=self.program.primal_value(self.t),
            x=np.array([self.program.primal_value(var) for var in self.x]),
            status=status,
        )
        logging.debug(f"master: t {candidate.t}")
        logging.debug(f"master: x {candidate.x}")
        return candidate

    def get_sentinel_candidate(self, status: SolveStatus) -> MasterCandidate:
        M = self.data.M
        logging.debug(f"master: {status.name}, using sentinel candidate M={M}")
        return MasterCandidate(
            t=M,
            x=M * np.ones(self.data.num_first_stage),
            status=status,
            sentinel=True,
        )

    def get_callback_candidate(self) -> MasterCandidate:
        return MasterCandidate(
            t=self.program.candidate_value(self.t),
            x=np.array([self.program.candidate_value(var) for var in self.x]),
        )

    def add_cut(self, cut: Cut, lazy: bool) -> None:
        if cut.kind == CutKind.FEASIBILITY:
            logging.debug(f"adding feasibility cut {cut}")
            terms = []
        else:
            logging.debug(f"adding optimality cut {cut}")
            terms = [(1.0, self.t)]
        terms += [(coef, var) for coef, var in zip(cut.coeffs, self.x) if coef != 0]
        if lazy:
            self.program.submit_lazy_constr(terms, Sense.LE, cut.rhs)
        else:
            self.program.add_constr(terms, Sense.LE, cut.rhs)
        self.cuts.append(cut)


class DualSubproblem(SubproblemProtocol):
    """min c1 @ x + (b - A1 @ x) @ u  subject to  A2.T @ u >= c2, u >= 0

    The constraints never depend on ``x``, so they are built once and only
    the objective is replaced before each solve. The duals of the constraints
    are the second stage decision ``v`` of the original problem.
    """

    def __init__(self, program: LinearProgram, data: ProblemData) -> None:
        self.program = program
        self.data = data
        self.u, self.constrs = self._make_subproblem(data)
        self._last: SubproblemOutcome | None = None

    def close(self) -> None:
        self.program.close()

    def _make_subproblem(self, data: ProblemData):
        u = [
            self.program.add_var(lb=0.0, name=f"u[{i}]")
            for i in range(data.num_constraints)
        ]
        constrs = [
            self.program.add_constr(
                [(data.A2[i, j], u[i]) for i in range(data.num_constraints)],
                Sense.GE,
                data.c2[j],
            )
            for j in range(data.num_second_stage)
        ]
        return u, constrs

    def resolve_for(self, x: np.ndarray) -> SubproblemOutcome:
        x = np.asarray(x, dtype=float)
        c_sub = self.data.b - self.data.A1 @ x
        self.program.set_objective(
            list(zip(c_sub, self.u)),
            constant=float(self.data.c1 @ x),
            sense=ObjSense.MINIMIZE,
        )
        status = self.program.solve()
        if status == SolveStatus.OPTIMAL:
            outcome = SubproblemOutcome(
                OutcomeKind.OPTIMAL,
                status,
                duals=np.array([self.program.primal_value(var) for var in self.u]),
                objval=self.program.objective_value(),
            )
        elif status == SolveStatus.INFEASIBLE_OR_UNBOUNDED:
            outcome = SubproblemOutcome(
                OutcomeKind.UNBOUNDED,
                status,
                duals=np.array([self.program.ray_value(var) for var in self.u]),
            )
        elif status == SolveStatus.INFEASIBLE_POINT:
            outcome = SubproblemOutcome(OutcomeKind.INFEASIBLE, status)
        else:
            raise UnexpectedStatus(None, status)
        logging.debug(f"sub: kind = {outcome.kind.name}")
        logging.debug(f"sub: obj_sub = {outcome.objval}")
        logging.debug(f"sub: u = {outcome.duals}")
        self._last = outcome
        return outcome

    def second_stage(self) -> np.ndarray:
        if self._last is None or self._last.kind != OutcomeKind.OPTIMAL:
            raise RuntimeError("second stage values need an optimal subproblem solve")
        return np.array([self.program.dual_value(constr) for constr in self.constrs])
