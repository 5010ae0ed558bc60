import numpy as np
import pytest


@pytest.fixture
def sample_map():
    return {**{i: "popA" for i in range(4)}, **{i: "popB" for i in range(4, 8)}}


@pytest.fixture
def block_calls():
    # four diploid individuals per site
    return [
        [[0, 1], [1, 0], [0, 0], [1, 1]],
        [[1, 1], [1, 1], [1, 1], [1, 1]],
        [[0, 0], [0, 1], [0, 0], [0, 0]],
    ]


@pytest.fixture
def block_array(block_calls):
    return np.array(block_calls, dtype=np.int8)
