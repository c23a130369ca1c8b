"""pytest glue: run the TestRunner-style suite under pytest."""
import pytest

from test_branch_notes import TestRunner


@pytest.fixture
def runner():
    test_runner = TestRunner()
    yield test_runner
    assert test_runner.failed == 0, "; ".join(test_runner.errors)
