"""
Shared pytest fixtures for prioritysim tests.
"""

import logging
from collections import deque
from collections.abc import Iterable
from pathlib import Path

import pytest

from prioritysim.distributions.variates import VariateSource


class ScriptedVariates(VariateSource):
    """Deterministic variate source for tests.

    Uniform draws return the next value from ``uniforms`` (or ``uniform_default``
    once the script runs out). Exponential draws work the same way with
    ``exponentials``. Every call is recorded in ``calls`` so tests can check the
    order in which the engine consumed variates.
    """

    def __init__(
        self,
        uniforms: Iterable[float] = (),
        exponentials: Iterable[float] = (),
        uniform_default: float | None = None,
        exponential_default: float | None = None,
    ):
        self._uniforms = deque(uniforms)
        self._exponentials = deque(exponentials)
        self._uniform_default = uniform_default
        self._exponential_default = exponential_default
        self.calls: list[tuple[str, float, float]] = []

    def next_uniform(self, low: float, high: float) -> float:
        self.calls.append(("uniform", low, high))
        if self._uniforms:
            return self._uniforms.popleft()
        if self._uniform_default is None:
            raise AssertionError("uniform script exhausted")
        return self._uniform_default

    def next_exponential(self, mean: float) -> float:
        self.calls.append(("exponential", mean, mean))
        if self._exponentials:
            return self._exponentials.popleft()
        if self._exponential_default is None:
            raise AssertionError("exponential script exhausted")
        return self._exponential_default


@pytest.fixture
def constant_variates():
    """Arrival gap 1.0 and service time 0.5 for every draw."""
    return ScriptedVariates(uniform_default=1.0, exponential_default=0.5)


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture(autouse=True)
def reset_prioritysim_logging():
    """Start every test with only the library's NullHandler attached."""
    logger = logging.getLogger("prioritysim")

    def _reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()


@pytest.fixture
def scripted_variates():
    """The ScriptedVariates class, for tests that need a custom script."""
    return ScriptedVariates
