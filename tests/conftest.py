# conftest.py - shared fixtures; keeps log files out of the working tree
import os
import tempfile

os.environ.setdefault("TYPO_LOOKUP_LOG_DIR", tempfile.mkdtemp(prefix="typo_lookup_logs_"))

import pytest

from typo_lookup.core.cost_model import KeyboardCostModel, UnitCostModel


@pytest.fixture
def unit():
    return UnitCostModel(swap=True)


@pytest.fixture
def classic():
    """Textbook Levenshtein: unit costs, no transpositions."""
    return UnitCostModel(swap=False)


@pytest.fixture
def keyboard():
    return KeyboardCostModel()


@pytest.fixture
def identifiers():
    return sorted({
        "apple", "apply", "apples", "applet", "application",
        "getName", "getValue", "setName", "setValue", "size",
        "toString", "hashCode", "equals", "length", "list", "lisp",
    })
