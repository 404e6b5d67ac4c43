import numpy as np
import pytest

from cancer_cv.validation import fold_boundaries, partition


def test_wdbc_sized_partition_is_disjoint_and_exhaustive():
    p = partition(569, 5, seed=42)

    assert p.fold_sizes == [114, 114, 114, 114, 113]
    combined = np.concatenate(p.folds)
    assert len(combined) == 569
    assert set(combined.tolist()) == set(range(569))


@pytest.mark.parametrize("seed", [0, 1, 42, 2024])
def test_every_row_tested_exactly_once(seed):
    p = partition(569, 5, seed=seed)
    counts = np.zeros(569, dtype=int)
    for fold, train_idx, test_idx in p.splits():
        counts[test_idx] += 1
        assert len(train_idx) + len(test_idx) == 569
        assert not set(train_idx.tolist()) & set(test_idx.tolist())
    assert (counts == 1).all()


def test_same_seed_gives_identical_partition():
    a = partition(569, 5, seed=7)
    b = partition(569, 5, seed=7)
    np.testing.assert_array_equal(a.permutation, b.permutation)
    for fa, fb in zip(a.folds, b.folds):
        np.testing.assert_array_equal(fa, fb)


def test_different_seeds_shuffle_differently():
    a = partition(569, 5, seed=1)
    b = partition(569, 5, seed=2)
    assert not np.array_equal(a.permutation, b.permutation)


def test_boundaries_are_contiguous():
    assert fold_boundaries(10, 3) == [(0, 4), (4, 7), (7, 10)]
    assert fold_boundaries(569, 5)[-1] == (456, 569)


def test_folds_are_contiguous_slices_of_the_permutation():
    p = partition(23, 4, seed=3)
    np.testing.assert_array_equal(np.concatenate(p.folds), p.permutation)


def test_one_row_per_fold_when_k_equals_n():
    p = partition(6, 6, seed=0)
    assert p.fold_sizes == [1] * 6


@pytest.mark.parametrize("k", [0, -1, 570])
def test_invalid_fold_counts_fail(k):
    with pytest.raises(ValueError):
        partition(569, k, seed=42)


def test_non_integer_fold_count_fails():
    with pytest.raises(TypeError):
        partition(569, 2.5, seed=42)


def test_partition_is_read_only():
    p = partition(20, 4, seed=0)
    with pytest.raises(ValueError):
        p.folds[0][0] = 99
    with pytest.raises(ValueError):
        p.permutation[0] = 99


@pytest.mark.parametrize("fold", [-1, -4, 4])
def test_train_indices_out_of_range(fold):
    p = partition(20, 4, seed=0)
    with pytest.raises(IndexError, match="out of range for 4 folds"):
        p.train_indices(fold)


@pytest.mark.parametrize("fold", [-1, -4, 4])
def test_test_indices_out_of_range(fold):
    p = partition(20, 4, seed=0)
    with pytest.raises(IndexError, match="out of range for 4 folds"):
        p.test_indices(fold)
