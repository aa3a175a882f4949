import pytest
import numpy as np


@pytest.fixture(params=[0, 1, 2024])
def rng(request) -> np.random.Generator:
    return np.random.default_rng(request.param)
