import logging

import numpy as np

from bendcut.errors import SubproblemInfeasible, UnexpectedStatus
from bendcut.staging import ProblemData
from bendcut.util import Cut, CutKind, MasterCandidate, OutcomeKind, SubproblemOutcome

DEFAULT_TOLERANCE = 1e-6


def bound_reached(fs: float, fm: float, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """True when the subproblem value ``fs`` meets the master bound ``fm``.

    Candidates found by the host solver's heuristics may sit strictly below
    the bound implied by the cuts, so ``fs > fm`` also counts.
    """
    return fs >= fm or bool(np.isclose(fs, fm, rtol=tolerance, atol=tolerance))


def make_cut(
    candidate: MasterCandidate,
    outcome: SubproblemOutcome,
    data: ProblemData,
    tolerance: float = DEFAULT_TOLERANCE,
) -> Cut | None:
    """Turn a subproblem outcome into the Benders cut for ``candidate``.

    Parameters
    ----------
    candidate : MasterCandidate
        The master point ``(t, x)`` the subproblem was solved for.
    outcome : SubproblemOutcome
        Result of ``resolve_for(candidate.x)``.
    data : ProblemData
        Problem constants.
    tolerance : float
        Relative and absolute tolerance on ``fs == t``.

    Returns
    -------
    Cut | None
        An optimality cut, a feasibility cut, or None if ``candidate`` is
        optimal.
    """
    if outcome.kind == OutcomeKind.INFEASIBLE:
        raise SubproblemInfeasible(candidate.status, outcome.status)
    if outcome.duals is None:
        raise UnexpectedStatus(candidate.status, outcome.status)

    u = outcome.duals
    gamma = float(data.b @ u)

    if outcome.kind == OutcomeKind.UNBOUNDED:
        logging.debug("extreme ray found, building feasibility cut")
        return Cut(CutKind.FEASIBILITY, data.A1.T @ u, gamma)

    if bound_reached(outcome.objval, candidate.t, tolerance):
        logging.debug(f"no cut: fs={outcome.objval} fm={candidate.t}")
        return None

    logging.debug("suboptimal vertex, building optimality cut")
    return Cut(CutKind.OPTIMALITY, data.A1.T @ u - data.c1, gamma)
