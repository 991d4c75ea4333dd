import textwrap

import pytest
from pydantic import ValidationError

from femtotest.config import DEFAULT_CONFIG, FemtoConfig, find_pyproject, load_config
from femtotest.errors import ConfigError


def write_pyproject(directory, body):
    path = directory / "pyproject.toml"
    path.write_text(textwrap.dedent(body))
    return path


def test_defaults():
    assert DEFAULT_CONFIG.test_paths == ["."]
    assert DEFAULT_CONFIG.pattern == "test_*.py"
    assert DEFAULT_CONFIG.reporter == "console"
    assert not DEFAULT_CONFIG.fail_on_error


def test_load_reads_tool_table(tmp_path):
    path = write_pyproject(
        tmp_path,
        """
        [tool.femtotest]
        test_paths = ["checks"]
        pattern = "check_*.py"
        verbose = true
        fail_on_error = true
        addopts = ["-a"]
        """,
    )

    config = load_config(path)

    assert config == FemtoConfig(
        test_paths=["checks"],
        pattern="check_*.py",
        verbose=True,
        fail_on_error=True,
        addopts=["-a"],
    )


def test_missing_table_gives_defaults(tmp_path):
    path = write_pyproject(tmp_path, '[project]\nname = "x"\n')

    assert load_config(path) is DEFAULT_CONFIG


def test_unreadable_file_gives_defaults(tmp_path, caplog):
    path = write_pyproject(tmp_path, "[tool.femtotest\n")

    with caplog.at_level("WARNING", logger="femtotest"):
        assert load_config(path) is DEFAULT_CONFIG

    assert "Ignoring unreadable" in caplog.text


@pytest.mark.parametrize(
    "body",
    [
        "[tool.femtotest]\nunknown_key = 1\n",
        '[tool.femtotest]\nverbose = "loud"\n',
    ],
)
def test_invalid_table_raises_config_error(tmp_path, body):
    path = write_pyproject(tmp_path, body)

    with pytest.raises(ConfigError, match="Invalid femtotest configuration"):
        load_config(path)


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.verbose = True


def test_find_pyproject_walks_up(tmp_path):
    path = write_pyproject(tmp_path, "")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_pyproject(nested) == path.resolve()
