import pytest

from wisp.interpreter import run
from wisp.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment for each test."""
    return Environment()


@pytest.fixture
def wisp_eval(env):
    """Run a source string in the shared test environment and return the last value."""
    def _eval(source: str):
        return run(source, env)
    return _eval
