import numpy as np
import pytest

from bendcut.cuts import bound_reached, make_cut
from bendcut.errors import SubproblemInfeasible
from bendcut.staging import ProblemData
from bendcut.util import (
    Cut,
    CutKind,
    MasterCandidate,
    OutcomeKind,
    SolveStatus,
    SubproblemOutcome,
)

DATA = ProblemData.garfinkel_nemhauser()


def subproblem_value(x, u):
    return DATA.c1 @ x + (DATA.b - DATA.A1 @ x) @ u


def test_optimality_cut_tight_at_candidate():
    x = np.array([0.0, 0.0])
    u = np.array([0.0, 2.0])
    fs = subproblem_value(x, u)
    candidate = MasterCandidate(t=1e6, x=x, status=SolveStatus.OPTIMAL)
    outcome = SubproblemOutcome(OutcomeKind.OPTIMAL, SolveStatus.OPTIMAL, u, fs)

    cut = make_cut(candidate, outcome, DATA)

    assert cut.kind == CutKind.OPTIMALITY
    assert np.allclose(cut.coeffs, DATA.A1.T @ u - DATA.c1)
    assert cut.rhs == pytest.approx(DATA.b @ u)
    assert cut.lhs(fs, x) == pytest.approx(cut.rhs)
    assert cut.is_violated(candidate.t, x)


def test_no_cut_when_bound_met():
    x = np.array([0.0, 1.0])
    u = np.array([0.0, 0.0])
    candidate = MasterCandidate(t=-4.0 + 1e-9, x=x, status=SolveStatus.OPTIMAL)
    outcome = SubproblemOutcome(OutcomeKind.OPTIMAL, SolveStatus.OPTIMAL, u, -4.0)
    assert make_cut(candidate, outcome, DATA) is None


def test_no_cut_for_candidate_below_bound():
    # heuristic incumbents can sit below the value of their x
    x = np.array([0.0, 1.0])
    u = np.array([0.0, 0.0])
    candidate = MasterCandidate(t=-10.0, x=x)
    outcome = SubproblemOutcome(OutcomeKind.OPTIMAL, SolveStatus.OPTIMAL, u, -4.0)
    assert make_cut(candidate, outcome, DATA) is None


def test_feasibility_cut_excludes_candidate():
    data = ProblemData(A1=[[1]], A2=[[1]], b=[2], c1=[1], c2=[-1])
    x = np.array([1000.0])
    ray = np.array([1.0])
    candidate = MasterCandidate(
        t=1000.0, x=x, status=SolveStatus.INFEASIBLE_OR_UNBOUNDED, sentinel=True
    )
    outcome = SubproblemOutcome(
        OutcomeKind.UNBOUNDED, SolveStatus.INFEASIBLE_OR_UNBOUNDED, ray
    )

    cut = make_cut(candidate, outcome, data)

    assert cut.kind == CutKind.FEASIBILITY
    assert np.allclose(cut.coeffs, [1.0])
    assert cut.rhs == pytest.approx(2.0)
    assert cut.coeffs @ x > cut.rhs
    assert cut.is_violated(candidate.t, x)
    assert not cut.is_violated(candidate.t, np.array([2.0]))


def test_infeasible_subproblem_is_fatal():
    candidate = MasterCandidate(t=0.0, x=np.zeros(2), status=SolveStatus.OPTIMAL)
    outcome = SubproblemOutcome(OutcomeKind.INFEASIBLE, SolveStatus.INFEASIBLE_POINT)
    with pytest.raises(SubproblemInfeasible, match="OPTIMAL.*INFEASIBLE_POINT"):
        make_cut(candidate, outcome, DATA)


@pytest.mark.parametrize(
    "fs, fm, expected",
    [
        (-4.0, -4.0, True),
        (-4.0, -4.0 + 1e-8, True),
        (1e6 - 0.1, 1e6, True),  # relative tolerance
        (-5.0, -4.0, False),
        (-3.0, -4.0, True),
    ],
)
def test_bound_reached(fs, fm, expected):
    assert bound_reached(fs, fm) == expected


def test_cut_str():
    cut = Cut(CutKind.OPTIMALITY, np.array([1.0, -2.0]), 3.0)
    assert str(cut) == "t + 1 x[0] + -2 x[1] <= 3"
    cut = Cut(CutKind.FEASIBILITY, np.array([1.0]), 2.0)
    assert str(cut) == "1 x[0] <= 2"
