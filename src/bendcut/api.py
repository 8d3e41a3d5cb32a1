import gurobipy as gp

from bendcut._logging import consolelog
from bendcut.config import Config
from bendcut.framework import get_framework_class
from bendcut.gurobi import GurobiProgram, GurobiSubproblemProgram
from bendcut.models import DualSubproblem, MasterProblem
from bendcut.solution import Result
from bendcut.staging import ProblemData


def solve(data: ProblemData, config: Config, env: gp.Env | None = None) -> Result:
    """Run Benders decomposition on ``data`` with gurobipy as the host solver

    Parameters
    ----------
    data : ProblemData
        Constants of the two-stage program.
    config : Config
        Framework choice, tolerances and solver parameters.
    env : gp.Env | None
        Gurobi environment shared by the master and subproblem models.

    Returns
    -------
    Result
        Objective, first stage ``x``, second stage ``v`` and the iteration log.

    Raises
    ------
    bendcut.errors.BendersError
        If the run ends in an infeasible master, an infeasible subproblem, an
        unexpected solver status, or hits ``max_iterations``.
    """
    master = MasterProblem(
        GurobiProgram("MASTER", env=env, params=config.master_params),
        data,
        x_ub=config.x_ub,
        t_ub=config.t_ub,
    )
    subproblem = DualSubproblem(
        GurobiSubproblemProgram("SUB", env=env, params=config.subproblem_params),
        data,
    )
    try:
        algo = get_framework_class(config.framework)(master, subproblem)
        result: Result = algo.solve(**config.get_solve_kwargs())
    finally:
        master.close()
        subproblem.close()

    consolelog.info(f"{result.Runtime=}")
    consolelog.info(f"{result.ObjVal=}")
    consolelog.info(f"{result.Iterations=}")
    consolelog.info(f"{result.NumCuts=}")
    return result
