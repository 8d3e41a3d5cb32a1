import logging
from textwrap import dedent

import click
import gurobipy as gp

from bendcut import maxcut
from bendcut._logging import consolelog
from bendcut.api import solve
from bendcut.config import Config, Framework
from bendcut.solution import Result
from bendcut.staging import ProblemData

logging.basicConfig(level=logging.ERROR)


def _set_loglevel(loglevel: str | None) -> None:
    if loglevel:
        logging_level = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
        }[loglevel.lower()]
        logging.basicConfig(level=logging_level, force=True)


@click.group()
@click.version_option()
def cli():
    "Command line interface for the bendcut package"


@cli.command(name="config_example")
def print_config():
    print(
        dedent("""
        # Example config.toml contents

        # framework = "callback" or "iterative"
        framework = "callback"

        # relative and absolute tolerance on subproblem value == master bound
        tolerance = 1e-6

        # finite bounds of the master problem variables
        x_ub = 1e6
        t_ub = 1e6


        [iterative_framework_params]

        # stop with an error after this many iterations (unlimited if absent)
        max_iterations = 1000


        [env_params]
        WLSACCESSID = "1234abcd-1234-abcd-1234-abcd1234abcd"
        WLSSECRET = "abcd1234-abcd-1234-abcd-1234abcd1234"
        LICENSEID = 123456

        [master_params]
        MIPFocus = 1

        [subproblem_params]
        TimeLimit = 10
        """)
    )


@cli.command(name="benders")
@click.argument(
    "filepath",
    type=click.Path(exists=True),
    required=False,
)
@click.option(
    "-f",
    "--framework",
    type=click.Choice([item.name for item in Framework]),
    default=None,
    help="Which framework to use",
)
@click.option(
    "--loglevel",
    type=str,
    default=None,
    help="Logging level",
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    default=None,
    help="Filepath for config toml file",
)
@click.option(
    "--ResultFile",
    type=str,
    default=None,
    help="Use to write .mst or .sol file",
)
def run_benders(
    filepath: str | None,
    framework: str | None,
    loglevel: str | None,
    config: str | None,
    resultfile: str | None,
):
    """Run Benders decomposition on a problem toml file (worked example if omitted)"""
    result = _run_benders(filepath, framework, loglevel, config, resultfile)
    consolelog.info(f"x = {result.X}")
    consolelog.info(f"v = {result.V}")


def _run_benders(
    filepath: str | None,
    framework: str | None,
    loglevel: str | None,
    config_path: str | None,
    resultfile: str | None,
) -> Result:
    config = Config(config_path)
    _set_loglevel(loglevel)

    if filepath is None:
        data = ProblemData.garfinkel_nemhauser()
    else:
        data = ProblemData.from_toml(filepath)
        logging.debug("Problem file read")

    if framework:
        config.framework = Framework[framework]
    with gp.Env(params=config.env_params) as env:
        result: Result = solve(data, config, env)
    if resultfile:
        result.write(resultfile)
    return result


@cli.command(name="maxcut")
@click.argument(
    "filepath",
    type=click.Path(exists=True),
    required=False,
)
@click.option("--seed", type=int, default=33, help="Seed for hyperplane rounding")
@click.option("--trials", type=int, default=1, help="Number of roundings to try")
@click.option(
    "--loglevel",
    type=str,
    default=None,
    help="Logging level",
)
def run_maxcut(filepath: str | None, seed: int, trials: int, loglevel: str | None):
    """Compare exact max-cut with SDP rounding on a weighted edge list"""
    _set_loglevel(loglevel)
    graph = maxcut.example_graph() if filepath is None else maxcut.read_graph(filepath)
    with gp.Env() as env:
        exact = maxcut.solve_max_cut_ip(graph, env)
    rounded = maxcut.goemans_williamson(graph, seed=seed, trials=trials)
    consolelog.info(f"IP optimum:      {exact.value:g}  {sorted(exact.subset)}")
    consolelog.info(f"SDP bound:       {rounded.bound:.6f}")
    consolelog.info(f"Rounded cut:     {rounded.value:g}  {sorted(rounded.subset)}")
