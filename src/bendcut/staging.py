import logging
import tomllib
from dataclasses import dataclass

import numpy as np


def _frozen(values, ndim: int, name: str) -> np.ndarray:
    array = np.array(values, dtype=float)
    if array.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}-dimensional, got shape {array.shape}")
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class ProblemData:
    """Data of the two-stage program

    maximize c1 @ x + c2 @ v  subject to  A1 @ x + A2 @ v <= b,
    x >= 0 integer, v >= 0.

    ``M`` is the stand-in magnitude used when the master problem has no
    candidate to offer.
    """

    A1: np.ndarray
    A2: np.ndarray
    b: np.ndarray
    c1: np.ndarray
    c2: np.ndarray
    M: float = 1000.0

    def __post_init__(self):
        for name, ndim in (("A1", 2), ("A2", 2), ("b", 1), ("c1", 1), ("c2", 1)):
            object.__setattr__(self, name, _frozen(getattr(self, name), ndim, name))
        object.__setattr__(self, "M", float(self.M))
        m = len(self.b)
        if self.A1.shape != (m, len(self.c1)):
            raise ValueError(
                f"A1 has shape {self.A1.shape}, expected {(m, len(self.c1))}"
            )
        if self.A2.shape != (m, len(self.c2)):
            raise ValueError(
                f"A2 has shape {self.A2.shape}, expected {(m, len(self.c2))}"
            )

    @property
    def num_constraints(self) -> int:
        return len(self.b)

    @property
    def num_first_stage(self) -> int:
        return len(self.c1)

    @property
    def num_second_stage(self) -> int:
        return len(self.c2)

    @classmethod
    def from_toml(cls, path: str) -> "ProblemData":
        with open(path, "rb") as f:
            values = tomllib.load(f)
        logging.debug(f"problem file {path} read")
        missing = {"A1", "A2", "b", "c1", "c2"} - set(values)
        if missing:
            raise ValueError(f"Missing problem data: {', '.join(sorted(missing))}")
        data = cls(
            A1=values.pop("A1"),
            A2=values.pop("A2"),
            b=values.pop("b"),
            c1=values.pop("c1"),
            c2=values.pop("c2"),
            M=values.pop("M", 1000.0),
        )
        if values:
            raise RuntimeError(f"Unknown problem values: {', '.join(values.keys())}")
        return data

    @classmethod
    def garfinkel_nemhauser(cls) -> "ProblemData":
        # Integer Programming, Garfinkel & Nemhauser (1972), p. 139
        return cls(
            A1=[[1, -3], [-1, -3]],
            A2=[[1, -2], [-1, -1]],
            b=[-2, -3],
            c1=[-1, -4],
            c2=[-2, -3],
            M=1000,
        )
