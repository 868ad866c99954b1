import pytest

from eta.interpreter import Interpreter
from eta.memory import MemoryManager
from eta.types.environment import Environment

# Every test gets a fresh interpreter: the environment holding the primitive
# and math libraries plus an empty memory manager. Tests that work below the
# driver use `env` and `memory` directly.


@pytest.fixture
def interp():
    with Interpreter() as interpreter:
        yield interpreter


@pytest.fixture
def env():
    return Environment.default()


@pytest.fixture
def memory():
    manager = MemoryManager()
    yield manager
    manager.dispose()
