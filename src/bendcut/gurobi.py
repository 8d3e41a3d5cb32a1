import logging
from typing import Any, Callable

import gurobipy as gp

from bendcut.util import ObjSense, Sense, SolveStatus, Terms, VarType

_STATUS = {
    gp.GRB.Status.OPTIMAL: SolveStatus.OPTIMAL,
    gp.GRB.Status.INF_OR_UNBD: SolveStatus.INFEASIBLE_OR_UNBOUNDED,
    gp.GRB.Status.UNBOUNDED: SolveStatus.INFEASIBLE_OR_UNBOUNDED,
    gp.GRB.Status.INFEASIBLE: SolveStatus.INFEASIBLE_POINT,
}

_VTYPE = {
    VarType.CONTINUOUS: gp.GRB.CONTINUOUS,
    VarType.INTEGER: gp.GRB.INTEGER,
    VarType.BINARY: gp.GRB.BINARY,
}

_SENSE = {
    Sense.LE: gp.GRB.LESS_EQUAL,
    Sense.GE: gp.GRB.GREATER_EQUAL,
    Sense.EQ: gp.GRB.EQUAL,
}

_OBJSENSE = {
    ObjSense.MINIMIZE: gp.GRB.MINIMIZE,
    ObjSense.MAXIMIZE: gp.GRB.MAXIMIZE,
}


def _linexpr(terms: Terms, constant: float = 0.0) -> gp.LinExpr:
    expr = gp.LinExpr([float(coef) for coef, _ in terms], [var for _, var in terms])
    expr.addConstant(constant)
    return expr


def _temp_constr(expr: gp.LinExpr, sense: Sense, rhs: float):
    if sense == Sense.LE:
        return expr <= rhs
    if sense == Sense.GE:
        return expr >= rhs
    return expr == rhs


class GurobiProgram:
    """``LinearProgram`` backed by a ``gurobipy.Model``

    Termination statuses other than optimal, infeasible and unbounded (time
    and iteration limits, interruption, numerical trouble) are reported as
    ``SolveStatus.ERROR``.
    """

    default_params: dict[str, Any] = {"OutputFlag": 0}

    def __init__(
        self,
        name: str = "",
        env: gp.Env | None = None,
        params: dict[str, Any] | None = None,
    ) -> None:
        self.model: gp.Model = gp.Model(name=name, env=env)
        self._callback: Callable[[], None] | None = None
        self._set_params(params)

    def _set_params(self, params: dict[str, Any] | None):
        default_params = dict(self.default_params)
        params = {**default_params, **params} if params else default_params
        for param, val in params.items():
            self.model.setParam(param, val)

    def add_var(
        self,
        lb: float = 0.0,
        ub: float = float("inf"),
        vtype: VarType = VarType.CONTINUOUS,
        name: str = "",
    ) -> gp.Var:
        lb = -gp.GRB.INFINITY if lb == -float("inf") else lb
        ub = gp.GRB.INFINITY if ub == float("inf") else ub
        return self.model.addVar(lb=lb, ub=ub, vtype=_VTYPE[vtype], name=name)

    def add_constr(self, terms: Terms, sense: Sense, rhs: float) -> gp.Constr:
        return self.model.addLConstr(_linexpr(terms), _SENSE[sense], rhs)

    def set_objective(
        self,
        terms: Terms,
        constant: float = 0.0,
        sense: ObjSense = ObjSense.MINIMIZE,
    ) -> None:
        self.model.setObjective(_linexpr(terms, constant), _OBJSENSE[sense])

    def solve(self) -> SolveStatus:
        if self._callback is None:
            self.model.optimize()
        else:
            self.model.optimize(self._dispatch)
        status = _STATUS.get(self.model.Status, SolveStatus.ERROR)
        logging.debug(f"{self.model.ModelName}: gurobi status {self.model.Status}")
        return status

    def primal_value(self, var: gp.Var) -> float:
        return var.X

    def dual_value(self, constr: gp.Constr) -> float:
        return constr.Pi

    def ray_value(self, var: gp.Var) -> float:
        return var.UnbdRay

    def objective_value(self) -> float:
        return self.model.ObjVal

    @property
    def num_constrs(self) -> int:
        self.model.update()
        return self.model.NumConstrs

    def register_lazy_callback(self, fn: Callable[[], None]) -> None:
        self.model.Params.LazyConstraints = 1
        self._callback = fn

    def _dispatch(self, _, where):
        if where == gp.GRB.Callback.MIPSOL:
            self._callback()

    def candidate_value(self, var: gp.Var) -> float:
        return self.model.cbGetSolution(var)

    def submit_lazy_constr(self, terms: Terms, sense: Sense, rhs: float) -> None:
        self.model.cbLazy(_temp_constr(_linexpr(terms), sense, rhs))

    def terminate(self) -> None:
        self.model.terminate()

    def close(self) -> None:
        self.model.close()


class GurobiSubproblemProgram(GurobiProgram):
    # definitive INFEASIBLE/UNBOUNDED statuses and extreme rays
    default_params = {"OutputFlag": 0, "InfUnbdInfo": 1, "DualReductions": 0}
