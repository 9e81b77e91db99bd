import os
import sys

import pytest

# The analyzer modules live at the repository root, not in a package.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from context import AnalysisContext  # noqa: E402


@pytest.fixture
def context():
    """A fresh analysis context."""
    return AnalysisContext()
