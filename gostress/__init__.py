"""gostress: run ``go test`` targets many times and tally pass/fail per test.

A drop-in wrapper around ``go test`` for stress-testing flaky tests.  Each
test gets one live status line showing ``passed/attempts`` and the duration
of the latest attempt; the captured output of a trailing failure is printed
once the run ends.
"""

__version__ = "0.1.0"

from gostress.core.aggregator import StressAggregator
from gostress.core.session import StressSession
from gostress.cli.app import app as cli

__all__ = ["StressAggregator", "StressSession", "cli", "__version__"]
