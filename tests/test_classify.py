import numpy as np
import pytest

from bsfs.errors import ConfigError, ShapeError, UnmappedHaplotypeError
from bsfs.spectrum.classify import classify, classify_block
from bsfs.spectrum.flatten import flatten_site
from bsfs.spectrum.populations import PopulationOrder


def test_classify_single_site(sample_map):
    flat = flatten_site([[0, 0], [0, 1], [0, 0], [0, 1]])

    assert classify(flat, sample_map) == (1, 1)


@pytest.mark.parametrize(
    "calls, expected",
    [
        ([0, 1, 1, 0, 0, 0, 1, 1], (2, 2)),
        ([1, 1, 1, 1, 1, 1, 1, 1], (4, 4)),
        ([0, 0, 0, 1, 0, 0, 0, 0], (1, 0)),
        ([0, 0, 0, 0, 0, 0, 0, 0], (0, 0)),
    ],
)
def test_classify_scenario_sites(sample_map, calls, expected):
    order = PopulationOrder.from_sample_map(sample_map)

    assert classify(np.array(calls), sample_map, order) == expected


def test_any_nonzero_call_is_derived(sample_map):
    assert classify(np.array([2, 0, 7, 0, 0, 1, 0, 0]), sample_map) == (2, 1)


def test_entries_bounded_by_population_size():
    rng = np.random.default_rng(5)
    sample_map = {i: ["a", "b", "c"][i % 3] for i in range(10)}
    order = PopulationOrder.from_sample_map(sample_map)

    for _ in range(20):
        site = rng.integers(0, 3, size=10)
        entry = classify(site, sample_map, order)
        assert len(entry) == 3
        assert sum(entry) <= order.total_haplotypes
        assert all(e <= n for e, n in zip(entry, order.haplotype_counts))


def test_unmapped_position_skipped_by_default():
    sample_map = {0: "popA", 1: "popA", 3: "popB"}

    assert classify(np.array([1, 1, 1, 1]), sample_map) == (2, 1)


def test_unmapped_position_strict():
    sample_map = {0: "popA", 1: "popA", 3: "popB"}

    with pytest.raises(IndexError) as excinfo:
        classify(np.array([1, 1, 1, 1]), sample_map, strict=True)
    assert isinstance(excinfo.value, UnmappedHaplotypeError)
    assert excinfo.value.position == 2


@pytest.mark.parametrize("strict", [False, True])
def test_map_beyond_site_is_a_shape_error(sample_map, strict):
    with pytest.raises(ShapeError, match="haplotype 4"):
        classify(np.array([1, 0, 1, 0]), sample_map, strict=strict)


def test_unassigned_positions_beyond_site_are_allowed():
    sample_map = {0: "popA", 1: "popB", 2: None}

    assert classify(np.array([1, 1]), sample_map) == (1, 1)


def test_non_integer_key_with_explicit_order():
    order = PopulationOrder(labels=("popA",), haplotype_counts=(2,))

    for strict in (False, True):
        with pytest.raises(ConfigError):
            classify(np.array([1, 1]), {0: "popA", "1": "popA"}, order, strict=strict)


def test_classify_block_site_shorter_than_map(sample_map):
    order = PopulationOrder.from_sample_map(sample_map)

    with pytest.raises(ShapeError):
        classify_block(np.ones((3, 4), dtype=int), sample_map, order)


def test_empty_population_scores_zero(sample_map):
    order = PopulationOrder.from_sample_map(sample_map, extra_populations=["popC"])

    assert classify(np.ones(8, dtype=int), sample_map, order) == (4, 4, 0)


def test_label_missing_from_order(sample_map):
    order = PopulationOrder(labels=("popA",), haplotype_counts=(4,))

    with pytest.raises(ConfigError):
        classify(np.ones(8, dtype=int), sample_map, order)


def test_classify_rejects_nested_site(sample_map):
    with pytest.raises(ShapeError):
        classify(np.zeros((4, 2)), sample_map)


def test_classify_block_matches_classify(sample_map, block_array):
    order = PopulationOrder.from_sample_map(sample_map)
    haps = block_array.reshape(3, 8)

    entries = classify_block(haps, sample_map, order)

    assert entries.shape == (3, 2)
    for row, site in zip(entries, haps):
        assert tuple(row) == classify(site, sample_map, order)


def test_classify_block_strict_reports_site():
    sample_map = {0: "popA", 2: "popB"}
    order = PopulationOrder.from_sample_map(sample_map)

    with pytest.raises(UnmappedHaplotypeError) as excinfo:
        classify_block(np.zeros((2, 3), dtype=int), sample_map, order, strict=True)
    assert excinfo.value.site == 0
    assert "haplotype 1" in str(excinfo.value)
