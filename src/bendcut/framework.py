import logging
import time
from typing import Tuple, Type

from bendcut import config
from bendcut._logging import consolelog
from bendcut._typing import Framework, Subproblem
from bendcut.cuts import DEFAULT_TOLERANCE, make_cut
from bendcut.errors import (
    BendersError,
    MasterInfeasible,
    MaxIterationsExceeded,
    UnexpectedStatus,
)
from bendcut.models import MasterProblem
from bendcut.solution import Result, SolutionStats
from bendcut.util import (
    Cut,
    IterationLog,
    IterationRecord,
    MasterCandidate,
    OutcomeKind,
    SolveStatus,
    SubproblemOutcome,
)

COLWIDTH = 16


def get_framework_class(framework_value: config.Framework) -> Type[Framework]:
    return {
        config.Framework.callback: CallbackFramework,
        config.Framework.iterative: IterativeFramework,
    }[framework_value]


class _BendersDriver(Framework):
    def __init__(self, master: MasterProblem, subproblem: Subproblem) -> None:
        self.master: MasterProblem = master
        self.subproblem: Subproblem = subproblem
        self.iteration: int = 0
        self.log = IterationLog()

    def _print_header(self) -> None:
        columns = ["Iteration", "Master t", "Subproblem", "Cut"]
        consolelog.info(" ".join(f"{col:>{COLWIDTH}}" for col in columns))

    def _print_row(
        self,
        candidate: MasterCandidate,
        outcome: SubproblemOutcome,
        cut: Cut | None,
    ) -> None:
        sub = "unbounded" if outcome.objval is None else f"{outcome.objval:.6f}"
        kind = "-" if cut is None else cut.kind.name.lower()
        consolelog.info(
            f"{f'iter {self.iteration}':>{COLWIDTH}} "
            f"{candidate.t:>{COLWIDTH}.6f} "
            f"{sub:>{COLWIDTH}} "
            f"{kind:>{COLWIDTH}}"
        )

    def _check_iterations(self, max_iterations: int | None) -> None:
        if max_iterations is not None and self.iteration >= max_iterations:
            raise MaxIterationsExceeded(max_iterations)

    def _evaluate(
        self, candidate: MasterCandidate, tolerance: float, lazy: bool
    ) -> Tuple[SubproblemOutcome, Cut | None]:
        outcome = self.subproblem.resolve_for(candidate.x)
        cut = make_cut(candidate, outcome, self.master.data, tolerance)
        if cut is not None:
            self.master.add_cut(cut, lazy=lazy)
        self.log.append(
            IterationRecord(
                iteration=self.iteration,
                master_status=candidate.status,
                candidate=candidate,
                outcome=outcome,
                cut=cut,
                num_cuts=len(self.master.cuts),
            )
        )
        self._print_row(candidate, outcome, cut)
        return outcome, cut

    def _make_result(
        self,
        candidate: MasterCandidate,
        outcome: SubproblemOutcome,
        start_time: float,
        termination_message: str,
    ) -> Result:
        v = None
        if outcome.kind == OutcomeKind.OPTIMAL:
            v = self.subproblem.second_stage()
        solution_stats = SolutionStats(
            Runtime=time.time() - start_time,
            ObjVal=candidate.t,
            Iterations=self.iteration,
            NumCuts=len(self.master.cuts),
        )
        consolelog.info(
            f"Terminating.  {termination_message}. Objective value: {candidate.t}"
        )
        return Result(
            objval=candidate.t,
            x=candidate.x,
            v=v,
            log=self.log,
            solution_stats=solution_stats,
            termination_message=termination_message,
        )


class IterativeFramework(_BendersDriver):
    def solve(
        self,
        tolerance: float = DEFAULT_TOLERANCE,
        max_iterations: int | None = None,
    ) -> Result:
        start_time = time.time()
        self._print_header()
        while True:
            self._check_iterations(max_iterations)
            self.iteration += 1
            status = self.master.optimize()
            if status == SolveStatus.INFEASIBLE_POINT:
                consolelog.info("Terminating.  The master problem is infeasible.")
                raise MasterInfeasible()
            if status == SolveStatus.INFEASIBLE_OR_UNBOUNDED:
                candidate = self.master.get_sentinel_candidate(status)
            elif status == SolveStatus.OPTIMAL:
                candidate = self.master.get_candidate(status)
            else:
                raise UnexpectedStatus(status)

            outcome, cut = self._evaluate(candidate, tolerance, lazy=False)
            if cut is None:
                if candidate.sentinel:
                    raise UnexpectedStatus(status, outcome.status)
                break
        return self._make_result(
            candidate, outcome, start_time, "Subproblem value meets master bound"
        )


class CallbackFramework(_BendersDriver):
    def __init__(self, master: MasterProblem, subproblem: Subproblem) -> None:
        super().__init__(master, subproblem)
        self.master.register_lazy_callback(self)
        self._tolerance: float = DEFAULT_TOLERANCE
        self._max_iterations: int | None = None
        self._error: BendersError | None = None

    def __call__(self) -> None:
        if self._error is not None:
            return
        try:
            self._check_iterations(self._max_iterations)
            self.iteration += 1
            candidate = self.master.get_callback_candidate()
            self._evaluate(candidate, self._tolerance, lazy=True)
        except BendersError as exc:
            logging.debug(f"callback: stopping search, {exc}")
            self._error = exc
            self.master.terminate()

    def solve(
        self,
        tolerance: float = DEFAULT_TOLERANCE,
        max_iterations: int | None = None,
    ) -> Result:
        self._tolerance = tolerance
        self._max_iterations = max_iterations
        start_time = time.time()
        self._print_header()
        status = self.master.optimize()
        if self._error is not None:
            raise self._error
        if status == SolveStatus.INFEASIBLE_POINT:
            consolelog.info("Terminating.  The master problem is infeasible.")
            raise MasterInfeasible()
        if status != SolveStatus.OPTIMAL:
            raise UnexpectedStatus(status)
        candidate = self.master.get_candidate(status)
        outcome = self.subproblem.resolve_for(candidate.x)
        return self._make_result(
            candidate, outcome, start_time, "Branch and bound completed"
        )
