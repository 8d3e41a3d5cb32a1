import logging
from dataclasses import dataclass
from typing import Any, Iterable, Set, Tuple

import cvxpy as cp
import gurobipy as gp
import networkx as nx
import numpy as np
import scipy.sparse as ss


@dataclass
class MaxCutResult:
    value: float
    subset: Set[Any]
    bound: float | None = None  # SDP relaxation value, when one was solved


def example_graph() -> nx.Graph:
    graph = nx.Graph()
    graph.add_nodes_from(range(1, 7))
    graph.add_edges_from([(1, 2), (1, 5), (2, 3), (2, 5), (3, 4), (4, 5), (4, 6)])
    return graph


def read_graph(filepath: str) -> nx.Graph:
    """Read a weighted edge list, one ``i j weight`` line per edge"""
    return nx.read_weighted_edgelist(filepath, nodetype=int)


def cut_value(graph: nx.Graph, subset: Iterable[Any]) -> float:
    subset = set(subset)
    return sum(
        w
        for i, j, w in graph.edges(data="weight", default=1.0)
        if (i in subset) != (j in subset)
    )


def weight_matrix(graph: nx.Graph) -> ss.csr_array:
    """Symmetric weight matrix in ``graph.nodes()`` order"""
    return nx.to_scipy_sparse_array(graph, weight="weight", format="csr")


def solve_max_cut_ip(graph: nx.Graph, env: gp.Env | None = None) -> MaxCutResult:
    """Exact max-cut with binary side variables x and edge variables z

    z_ij <= x_i + x_j and z_ij <= 2 - (x_i + x_j) force z_ij = 0 whenever both
    endpoints are on the same side.
    """
    nodes = list(graph.nodes())
    edges = list(graph.edges(data="weight", default=1.0))
    with gp.Model("MAXCUT", env=env) as model:
        model.Params.OutputFlag = 0
        x = model.addVars(nodes, vtype=gp.GRB.BINARY, name="x")
        z = model.addVars([(i, j) for i, j, _ in edges], vtype=gp.GRB.BINARY, name="z")
        for i, j, _ in edges:
            model.addConstr(z[i, j] <= x[i] + x[j])
            model.addConstr(z[i, j] <= 2 - (x[i] + x[j]))
        model.setObjective(
            gp.quicksum(w * z[i, j] for i, j, w in edges), gp.GRB.MAXIMIZE
        )
        model.optimize()
        if model.Status != gp.GRB.Status.OPTIMAL:
            raise RuntimeError(f"max-cut IP ended with gurobi status {model.Status}")
        subset = {i for i in nodes if x[i].X > 0.5}
        logging.debug(f"maxcut ip: value {model.ObjVal}, subset {subset}")
        return MaxCutResult(value=model.ObjVal, subset=subset)


def solve_max_cut_sdp(
    graph: nx.Graph, solver: str | None = None
) -> Tuple[float, np.ndarray]:
    """Semidefinite relaxation of max-cut

    maximize 1/4 sum_ij w_ij (1 - Y_ij)  subject to  Y psd, diag(Y) = 1
    """
    n = graph.number_of_nodes()
    W = weight_matrix(graph).toarray()
    Y = cp.Variable((n, n), symmetric=True)
    constraints = [Y >> 0, cp.diag(Y) == 1]
    problem = cp.Problem(cp.Maximize(0.25 * cp.sum(cp.multiply(W, 1 - Y))), constraints)
    problem.solve(solver=solver)
    if problem.status not in (cp.OPTIMAL, cp.OPTIMAL_INACCURATE):
        raise RuntimeError(f"max-cut SDP ended with status {problem.status}")
    logging.debug(f"maxcut sdp: bound {problem.value}")
    return problem.value, Y.value


def hyperplane_round(Y: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Mask of the nodes on the positive side of a random hyperplane"""
    U, S, _ = np.linalg.svd(Y)
    factor = U @ np.diag(np.sqrt(np.clip(S, 0, None)))
    r = rng.standard_normal(factor.shape[1])
    return factor @ r > 0


def goemans_williamson(
    graph: nx.Graph,
    seed: int | None = None,
    trials: int = 1,
    solver: str | None = None,
) -> MaxCutResult:
    """Best cut over ``trials`` hyperplane roundings of the SDP solution"""
    if trials < 1:
        raise ValueError(f"trials must be at least 1, got {trials}")
    bound, Y = solve_max_cut_sdp(graph, solver=solver)
    nodes = list(graph.nodes())
    rng = np.random.default_rng(seed)
    best: MaxCutResult | None = None
    for _ in range(trials):
        mask = hyperplane_round(Y, rng)
        subset = {node for node, side in zip(nodes, mask) if side}
        value = cut_value(graph, subset)
        if best is None or value > best.value:
            best = MaxCutResult(value=value, subset=subset, bound=bound)
    logging.debug(f"maxcut rounding: best value {best.value} over {trials} trials")
    return best
