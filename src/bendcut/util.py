from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Sequence, Tuple

import numpy as np

Terms = Sequence[Tuple[float, Any]]


class SolveStatus(Enum):
    OPTIMAL = auto()
    INFEASIBLE_OR_UNBOUNDED = auto()
    INFEASIBLE_POINT = auto()
    ERROR = auto()


class VarType(Enum):
    CONTINUOUS = auto()
    INTEGER = auto()
    BINARY = auto()


class Sense(Enum):
    LE = "<="
    GE = ">="
    EQ = "=="


class ObjSense(Enum):
    MINIMIZE = auto()
    MAXIMIZE = auto()


class OutcomeKind(Enum):
    OPTIMAL = auto()
    UNBOUNDED = auto()
    INFEASIBLE = auto()


class CutKind(Enum):
    OPTIMALITY = auto()
    FEASIBILITY = auto()


@dataclass
class MasterCandidate:
    t: float
    x: np.ndarray
    status: SolveStatus | None = None  # None when read inside a callback
    sentinel: bool = False


@dataclass
class SubproblemOutcome:
    kind: OutcomeKind
    status: SolveStatus
    duals: np.ndarray | None = None  # optimal u, or the extreme ray
    objval: float | None = None


@dataclass(frozen=True)
class Cut:
    """Linear inequality over the master variables

    Optimality cuts read ``t + coeffs @ x <= rhs``, feasibility cuts read
    ``coeffs @ x <= rhs``.
    """

    kind: CutKind
    coeffs: np.ndarray
    rhs: float

    def lhs(self, t: float, x: np.ndarray) -> float:
        value = float(self.coeffs @ x)
        if self.kind == CutKind.OPTIMALITY:
            value += t
        return value

    def is_violated(self, t: float, x: np.ndarray, tol: float = 1e-6) -> bool:
        return self.lhs(t, x) > self.rhs + tol

    def __str__(self):
        coeffs = " + ".join(f"{c:g} x[{i}]" for i, c in enumerate(self.coeffs))
        prefix = "t + " if self.kind == CutKind.OPTIMALITY else ""
        return f"{prefix}{coeffs} <= {self.rhs:g}"


@dataclass
class IterationRecord:
    iteration: int
    master_status: SolveStatus | None
    candidate: MasterCandidate
    outcome: SubproblemOutcome
    cut: Cut | None
    num_cuts: int


@dataclass
class IterationLog:
    records: List[IterationRecord] = field(default_factory=list)

    def append(self, record: IterationRecord) -> None:
        self.records.append(record)

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, i):
        return self.records[i]

    @property
    def cuts(self) -> List[Cut]:
        return [record.cut for record in self.records if record.cut is not None]
