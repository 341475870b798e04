"""Tests for the genotype count cache."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from genolik.core import counts
from genolik.core.combinatorics import binomial_coefficient
from genolik.core.counts import GenotypeCountCache, num_likelihoods
from genolik.exceptions import InvalidArgumentError


@pytest.mark.parametrize("n_alleles", [2, 3, 4, 5])
def test_diploid_counts_are_triangular(n_alleles, count_cache):
    assert count_cache.get(n_alleles, 2) == n_alleles * (n_alleles + 1) // 2


@pytest.mark.parametrize(
    "n_alleles, ploidy, expected",
    [
        (1, 1, 1),
        (2, 5, 6),
        (4, 20, 1771),
        (5, 10, 1001),
        (10, 16, 2042975),
    ],
)
def test_known_counts(n_alleles, ploidy, expected, count_cache):
    assert count_cache.get(n_alleles, ploidy) == expected
    assert num_likelihoods(n_alleles, ploidy) == expected


def test_counts_match_multiset_formula(count_cache):
    for n_alleles in range(1, 12):
        for ploidy in range(1, 12):
            expected = binomial_coefficient(n_alleles + ploidy - 1, ploidy)
            assert count_cache.get(n_alleles, ploidy) == expected


@pytest.mark.parametrize("n_alleles, ploidy", [(1, 0), (0, 1), (-1, 5), (3, -4)])
def test_non_positive_arguments_rejected(n_alleles, ploidy, count_cache):
    with pytest.raises(InvalidArgumentError):
        count_cache.get(n_alleles, ploidy)
    assert len(count_cache) == 0


def test_count_computed_once(count_cache):
    with patch.object(counts, "multiset_coefficient", wraps=counts.multiset_coefficient) as spy:
        first = count_cache.get(7, 9)
        second = count_cache.get(7, 9)
    assert first == second == 5005
    assert spy.call_count == 1
    assert (7, 9) in count_cache


def test_clear_empties_cache(count_cache):
    count_cache.get(3, 3)
    assert len(count_cache) == 1
    count_cache.clear()
    assert len(count_cache) == 0


def test_explicit_cache_is_used():
    cache = GenotypeCountCache()
    assert num_likelihoods(6, 4, cache=cache) == 126
    assert (6, 4) in cache


def test_concurrent_first_access(count_cache):
    keys = [(n_alleles, ploidy) for n_alleles in range(1, 9) for ploidy in range(1, 9)] * 8

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda key: count_cache.get(*key), keys))

    expected = [binomial_coefficient(n + p - 1, p) for n, p in keys]
    assert results == expected
    assert len(count_cache) == 64
