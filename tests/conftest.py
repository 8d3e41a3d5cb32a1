import gurobipy as gp
import pytest

from bendcut.gurobi import GurobiProgram, GurobiSubproblemProgram
from bendcut.models import DualSubproblem, MasterProblem
from bendcut.util import ObjSense, SolveStatus, VarType

PROBLEM_DIRECTORY = "./tests/problems"
GRAPH_DIRECTORY = "./tests/graphs"


@pytest.fixture(scope="session")
def env():
    with gp.Env(params={"OutputFlag": 0}) as env:
        yield env


def make_models(data, env):
    master = MasterProblem(GurobiProgram("MASTER", env=env), data)
    subproblem = DualSubproblem(GurobiSubproblemProgram("SUB", env=env), data)
    return master, subproblem


class ScriptedProgram:
    """LinearProgram replaying a fixed sequence of solves

    Each script entry is ``(status, values)``; ``values`` maps variable names
    (and ``"obj"``, ``("dual", i)``) to the numbers reported after that solve.
    ``candidates`` are fed one by one to a registered lazy callback on every
    solve.
    """

    def __init__(self, script, candidates=()):
        self.script = list(script)
        self.candidates = list(candidates)
        self.vars = []
        self.constrs = []
        self.lazy = []
        self.objective = None
        self.terminated = False
        self.closed = False
        self._values = {}
        self._candidate = {}
        self._callback = None

    def add_var(self, lb=0.0, ub=float("inf"), vtype=VarType.CONTINUOUS, name=""):
        self.vars.append(name)
        return name

    def add_constr(self, terms, sense, rhs):
        self.constrs.append((list(terms), sense, rhs))
        return len(self.constrs) - 1

    def set_objective(self, terms, constant=0.0, sense=ObjSense.MINIMIZE):
        self.objective = (list(terms), constant, sense)

    def solve(self):
        status, self._values = self.script.pop(0)
        if self._callback is not None:
            for candidate in self.candidates:
                if self.terminated:
                    break
                self._candidate = candidate
                self._callback()
        return status

    def primal_value(self, var):
        return self._values[var]

    def dual_value(self, constr):
        return self._values.get(("dual", constr), 0.0)

    def ray_value(self, var):
        return self._values[var]

    def objective_value(self):
        return self._values["obj"]

    @property
    def num_constrs(self):
        return len(self.constrs)

    def register_lazy_callback(self, fn):
        self._callback = fn

    def candidate_value(self, var):
        return self._candidate[var]

    def submit_lazy_constr(self, terms, sense, rhs):
        self.lazy.append((list(terms), sense, rhs))

    def terminate(self):
        self.terminated = True

    def close(self):
        self.closed = True


OPTIMAL = SolveStatus.OPTIMAL
INFEASIBLE_OR_UNBOUNDED = SolveStatus.INFEASIBLE_OR_UNBOUNDED
INFEASIBLE_POINT = SolveStatus.INFEASIBLE_POINT
ERROR = SolveStatus.ERROR
