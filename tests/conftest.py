import matplotlib
import numpy as np
import pytest

# Viewer tests build figures without a display
matplotlib.use("Agg")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
