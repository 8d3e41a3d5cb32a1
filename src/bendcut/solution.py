from dataclasses import dataclass

import numpy as np

from bendcut.util import IterationLog


@dataclass
class SolutionStats:
    Runtime: float | None = None
    ObjVal: float | None = None
    Iterations: int | None = None
    NumCuts: int | None = None


class Result:
    def __init__(
        self,
        objval: float,
        x: np.ndarray,
        v: np.ndarray | None,
        log: IterationLog,
        solution_stats: SolutionStats,
        termination_message: str = "",
    ):
        self._objval: float = objval
        self._x: np.ndarray = x
        self._v: np.ndarray | None = v
        self._log: IterationLog = log
        self._solution_stats: SolutionStats = solution_stats
        self.termination_message = termination_message

    @property
    def X(self) -> np.ndarray:
        return self._x

    @property
    def V(self) -> np.ndarray | None:
        return self._v

    @property
    def ObjVal(self) -> float:
        return self._objval

    @property
    def Runtime(self):
        return self._solution_stats.Runtime

    @property
    def Iterations(self):
        return self._solution_stats.Iterations

    @property
    def NumCuts(self):
        return self._solution_stats.NumCuts

    @property
    def log(self) -> IterationLog:
        return self._log

    def stats_string(self):
        return str(self._solution_stats)

    def write(self, filename: str) -> None:
        ext = filename.split(".")[-1]
        if ext not in ("sol", "mst"):
            raise ValueError(
                f"File has extension .{ext} but must extension .sol or .mst"
            )
        with open(filename, "w") as file:
            for i, x in enumerate(self._x):
                print(f"x[{i}] {x:g}", file=file)
            if ext == "sol":
                print(f"t {self._objval:g}", file=file)
                if self._v is not None:
                    for i, v in enumerate(self._v):
                        print(f"v[{i}] {v:g}", file=file)
