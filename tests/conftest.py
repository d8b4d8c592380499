import os

import pytest
from hypothesis import settings

from monkey.monkey_environment import Environment

# Subprocess-based CLI tests report coverage when started under `coverage run`
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

settings.register_profile("ci", max_examples=200, deadline=None)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture  # type: ignore[misc]
def env() -> Environment:
    return Environment()
