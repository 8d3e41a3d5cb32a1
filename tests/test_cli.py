import tomllib

import numpy as np
import pytest
from click.testing import CliRunner

from bendcut.cli import _run_benders, cli
from bendcut.config import Config, Framework
from conftest import GRAPH_DIRECTORY, PROBLEM_DIRECTORY


def test_config_example_is_valid(tmp_path):
    result = CliRunner().invoke(cli, ["config_example"])
    assert result.exit_code == 0
    values = tomllib.loads(result.output)
    assert values["framework"] == "callback"

    # a config without the licence tables loads cleanly
    path = tmp_path / "config.toml"
    path.write_text(
        result.output.split("[env_params]")[0]
        + "[master_params]\nMIPFocus = 1\n"
    )
    config = Config(str(path))
    assert config.framework == Framework.callback
    assert config.max_iterations == 1000


@pytest.mark.parametrize("framework", ["callback", "iterative"])
def test_run_benders(framework, tmp_path):
    resultfile = str(tmp_path / "result.sol")
    result = _run_benders(
        filepath=f"{PROBLEM_DIRECTORY}/garfinkel_nemhauser.toml",
        framework=framework,
        loglevel=None,
        config_path=None,
        resultfile=resultfile,
    )
    assert result.ObjVal == pytest.approx(-4, abs=1e-5)
    assert np.allclose(result.X, [0, 1], atol=1e-5)
    lines = (tmp_path / "result.sol").read_text().splitlines()
    assert lines[0].startswith("x[0] ")
    assert lines[2].split() == ["t", "-4"]


def test_run_benders_default_problem():
    result = _run_benders(None, None, None, None, None)
    assert result.ObjVal == pytest.approx(-4, abs=1e-5)


def test_bad_result_extension(tmp_path):
    with pytest.raises(ValueError, match=".txt"):
        _run_benders(None, "iterative", None, None, str(tmp_path / "result.txt"))


def test_benders_command():
    result = CliRunner().invoke(
        cli, ["benders", f"{PROBLEM_DIRECTORY}/capped.toml", "-f", "iterative"]
    )
    assert result.exit_code == 0, result.output


def test_maxcut_command():
    result = CliRunner().invoke(
        cli, ["maxcut", f"{GRAPH_DIRECTORY}/six_node.edgelist", "--trials", "5"]
    )
    assert result.exit_code == 0, result.output
