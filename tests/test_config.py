import pytest

from bendcut.config import Config, Framework


def write(tmp_path, text):
    path = tmp_path / "config.toml"
    path.write_text(text)
    return str(path)


def test_defaults():
    config = Config()
    assert config.framework == Framework.callback
    assert config.tolerance == 1e-6
    assert config.max_iterations is None
    assert config.x_ub == 1e6
    assert config.t_ub == 1e6
    assert config.get_solve_kwargs() == {"tolerance": 1e-6}


def test_from_toml(tmp_path):
    config = Config(
        write(
            tmp_path,
            """
            framework = "iterative"
            tolerance = 1e-7
            x_ub = 100
            t_ub = 500

            [iterative_framework_params]
            max_iterations = 5

            [env_params]
            LogToConsole = 0

            [master_params]
            MIPFocus = 1

            [subproblem_params]
            TimeLimit = 5
            """,
        )
    )
    assert config.framework == Framework.iterative
    assert config.x_ub == 100
    assert config.t_ub == 500
    assert config.get_solve_kwargs() == {"tolerance": 1e-7, "max_iterations": 5}
    assert config.env_params == {"LogToConsole": 0}
    assert config.master_params == {"MIPFocus": 1}
    assert config.subproblem_params == {"TimeLimit": 5}


def test_max_iterations_only_passed_to_iterative(tmp_path):
    config = Config(
        write(tmp_path, "[iterative_framework_params]\nmax_iterations = 5\n")
    )
    assert config.framework == Framework.callback
    assert config.max_iterations == 5
    assert config.get_solve_kwargs() == {"tolerance": 1e-6}


def test_unknown_values(tmp_path):
    with pytest.raises(RuntimeError, match="verbose"):
        Config(write(tmp_path, "verbose = true\n"))
    with pytest.raises(RuntimeError, match="iterative_framework_params.gap"):
        Config(write(tmp_path, "[iterative_framework_params]\ngap = 0.1\n"))
    with pytest.raises(RuntimeError, match="framework_params"):
        Config(write(tmp_path, "[framework_params]\ntolerance = 1e-6\n"))


def test_unknown_framework(tmp_path):
    with pytest.raises(ValueError, match="framework must be one of"):
        Config(write(tmp_path, 'framework = "parallel"\n'))


@pytest.mark.parametrize("key", ["x_ub", "t_ub"])
@pytest.mark.parametrize("value", ["inf", "-inf", "nan"])
def test_bounds_must_be_finite(key, value, tmp_path):
    with pytest.raises(ValueError, match=f"{key} must be finite"):
        Config(write(tmp_path, f"{key} = {value}\n"))
