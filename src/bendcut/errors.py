from bendcut.util import SolveStatus


def _status_pair(
    master_status: SolveStatus | None, subproblem_status: SolveStatus | None
) -> str:
    master = "-" if master_status is None else master_status.name
    sub = "-" if subproblem_status is None else subproblem_status.name
    return f"(master={master}, subproblem={sub})"


class BendersError(RuntimeError):
    """Base class for fatal conditions that abort a Benders run"""


class MasterInfeasible(BendersError):
    def __init__(self) -> None:
        super().__init__("The master problem is infeasible")


class UnexpectedStatus(BendersError):
    def __init__(
        self,
        master_status: SolveStatus | None,
        subproblem_status: SolveStatus | None = None,
    ) -> None:
        self.master_status = master_status
        self.subproblem_status = subproblem_status
        super().__init__(
            f"Unexpected status: {_status_pair(master_status, subproblem_status)}"
        )


class SubproblemInfeasible(BendersError):
    def __init__(
        self, master_status: SolveStatus | None, subproblem_status: SolveStatus
    ) -> None:
        self.master_status = master_status
        self.subproblem_status = subproblem_status
        super().__init__(
            "Subproblem has no feasible dual point: "
            f"{_status_pair(master_status, subproblem_status)}"
        )


class MaxIterationsExceeded(BendersError):
    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(f"No convergence within {max_iterations} iterations")
