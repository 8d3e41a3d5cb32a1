import math
import tomllib
from enum import Enum, auto
from typing import Any, Dict


class Framework(Enum):
    callback = auto()
    iterative = auto()

    @staticmethod
    def default():
        return Framework.callback


class Config:
    def __init__(self, toml_path: str | None = None) -> None:
        values = self._get_dict_from_toml(toml_path)
        iterative_params = values.pop("iterative_framework_params", {})
        self.framework: Framework = self._get_framework(
            values.pop("framework", Framework.default())
        )
        self.tolerance: float = values.pop("tolerance", 1e-6)
        self.x_ub: float = self._get_bound("x_ub", values.pop("x_ub", 1e6))
        self.t_ub: float = self._get_bound("t_ub", values.pop("t_ub", 1e6))
        self.max_iterations: int | None = iterative_params.pop("max_iterations", None)
        self.env_params: dict[str, Any] = values.pop("env_params", {})
        self.master_params: dict[str, Any] = values.pop("master_params", {})
        self.subproblem_params: dict[str, Any] = values.pop("subproblem_params", {})

        unknown = list(values.keys()) + [
            f"iterative_framework_params.{key}" for key in iterative_params
        ]
        if unknown:
            raise RuntimeError(f"Unknown config values: {', '.join(unknown)}")

    def get_solve_kwargs(self) -> Dict:
        kwargs: dict[str, Any] = {"tolerance": self.tolerance}
        if self.framework == Framework.iterative:
            kwargs["max_iterations"] = self.max_iterations

        return kwargs

    @staticmethod
    def _get_framework(value: Framework | str) -> Framework:
        if isinstance(value, Framework):
            return value
        try:
            return Framework[value]
        except KeyError:
            names = [item.name for item in Framework]
            message = f"framework must be one of {names}, got {value!r}"
            raise ValueError(message) from None

    @staticmethod
    def _get_bound(name: str, value: float) -> float:
        # an infinite t_ub leaves the master unbounded after feasibility cuts
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")
        return value

    def _get_dict_from_toml(self, toml_path):
        if toml_path is None:
            return {}
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
        return data
