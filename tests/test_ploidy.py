"""Tests for arbitrary-ploidy likelihood indexing."""

import random

import pytest

from genolik.core.combinatorics import binomial_coefficient
from genolik.core.counts import num_likelihoods
from genolik.core.diploid import MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED
from genolik.core.ploidy import PloidyIndex, genotype_index, get_alleles
from genolik.exceptions import InvalidArgumentError, OutOfRangeError


def _index_by_formula(alleles):
    return sum(
        binomial_coefficient(allele + m - 1, m)
        for m, allele in enumerate(alleles, start=1)
        if allele != 0
    )


@pytest.mark.parametrize(
    "index, ploidy, expected",
    [
        (0, 3, (0, 0, 0)),
        (1, 3, (0, 0, 1)),
        (2, 3, (0, 1, 1)),
        (3, 3, (1, 1, 1)),
        (4, 3, (0, 0, 2)),
        (5, 3, (0, 1, 2)),
        (6, 3, (1, 1, 2)),
        (7, 3, (0, 2, 2)),
        (8, 3, (1, 2, 2)),
        (9, 3, (2, 2, 2)),
        (10, 3, (0, 0, 3)),
        (11, 3, (0, 1, 3)),
        (12, 3, (1, 1, 3)),
        (13, 3, (0, 2, 3)),
        (14, 3, (1, 2, 3)),
        (15, 3, (2, 2, 3)),
        (16, 3, (0, 3, 3)),
        (17, 3, (1, 3, 3)),
        (18, 3, (2, 3, 3)),
        (19, 3, (3, 3, 3)),
        (1, 1, (1,)),
        (1539, 5, (1, 3, 5, 7, 9)),
        (1988400, 12, (0, 0, 0, 0, 0, 1, 3, 8, 11, 11, 11, 12)),
        (8573, 7, (3, 3, 5, 6, 6, 8, 9)),
    ],
)
def test_get_alleles(index, ploidy, expected, ploidy_index):
    assert ploidy_index.index_to_combination(index, ploidy) == expected
    assert ploidy_index.combination_to_index(expected) == index
    assert get_alleles(index, ploidy) == expected


def test_random_combinations_derived_in_reverse(ploidy_index):
    rng = random.Random(0)
    for _ in range(100):
        ploidy = rng.randint(1, 15)
        alleles = tuple(sorted(rng.randint(0, 7) for _ in range(ploidy)))
        index = _index_by_formula(alleles)
        assert ploidy_index.index_to_combination(index, ploidy) == alleles


@pytest.mark.parametrize("ploidy", [1, 2, 3, 5, 7, 12])
def test_round_trip_random_combinations(ploidy, ploidy_index):
    rng = random.Random(ploidy)
    for _ in range(300):
        alleles = tuple(sorted(rng.randint(0, 40) for _ in range(ploidy)))
        index = ploidy_index.combination_to_index(alleles)
        assert ploidy_index.index_to_combination(index, ploidy) == alleles


@pytest.mark.parametrize("ploidy", [1, 2, 3, 5, 7, 12])
def test_round_trip_random_indices(ploidy, ploidy_index):
    rng = random.Random(100 + ploidy)
    n_genotypes = num_likelihoods(20, ploidy)
    for _ in range(300):
        index = rng.randrange(n_genotypes)
        alleles = ploidy_index.index_to_combination(index, ploidy)
        assert len(alleles) == ploidy
        assert list(alleles) == sorted(alleles)
        assert max(alleles) < 20
        assert ploidy_index.combination_to_index(alleles) == index


@pytest.mark.parametrize("n_alleles, ploidy", [(2, 1), (3, 2), (4, 3), (3, 6), (5, 4)])
def test_every_index_of_a_site_round_trips(n_alleles, ploidy, ploidy_index):
    combinations = ploidy_index.enumerate_combinations(n_alleles, ploidy)
    assert len(combinations) == num_likelihoods(n_alleles, ploidy)
    for index, combination in enumerate(combinations):
        assert ploidy_index.index_to_combination(index, ploidy) == combination
        assert ploidy_index.combination_to_index(combination) == index


def test_enumerate_diploid_order(ploidy_index):
    assert ploidy_index.enumerate_combinations(3, 2) == [
        (0, 0), (0, 1), (1, 1), (0, 2), (1, 2), (2, 2),
    ]


def test_enumerate_rejects_non_positive(ploidy_index):
    with pytest.raises(InvalidArgumentError):
        ploidy_index.enumerate_combinations(0, 2)


def test_haploid_index_is_allele(ploidy_index):
    for allele in (0, 1, 7, 10**15):
        assert ploidy_index.combination_to_index([allele]) == allele
        assert ploidy_index.index_to_combination(allele, 1) == (allele,)


def test_large_ploidy_and_alleles(ploidy_index):
    alleles = tuple(range(0, 300, 10))
    index = ploidy_index.combination_to_index(alleles)
    assert index > 2**64
    assert ploidy_index.index_to_combination(index, len(alleles)) == alleles


def test_diploid_fast_path_matches_general(ploidy_index):
    for index in range(2000):
        assert ploidy_index.get_alleles(index, 2) == ploidy_index.index_to_combination(index, 2)


@pytest.mark.parametrize("index, ploidy", [(-1, 3), (-1, 2), (-1, 1), (3, -1), (3, 0)])
def test_out_of_range(index, ploidy, ploidy_index):
    with pytest.raises(OutOfRangeError):
        ploidy_index.get_alleles(index, ploidy)
    with pytest.raises(OutOfRangeError):
        get_alleles(index, ploidy)


def test_default_diploid_decode_is_bounded(ploidy_index):
    too_large = num_likelihoods(MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED + 1, 2)
    assert get_alleles(too_large - 1, 2) == (50, 50)
    with pytest.raises(OutOfRangeError):
        get_alleles(too_large, 2)
    # an explicit index stays unbounded
    assert ploidy_index.get_alleles(too_large, 2) == (0, 51)
    # other ploidies are not bounded by the diploid table
    assert get_alleles(too_large, 3) == ploidy_index.index_to_combination(too_large, 3)


def test_bounded_decode():
    bounded = PloidyIndex(max_allele_index=MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED)
    too_large = num_likelihoods(MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED + 1, 2)
    assert bounded.get_alleles(too_large - 1, 2) == (50, 50)
    with pytest.raises(OutOfRangeError):
        bounded.get_alleles(too_large, 2)

    bounded = PloidyIndex(max_allele_index=3)
    assert bounded.index_to_combination(19, 3) == (3, 3, 3)
    with pytest.raises(OutOfRangeError):
        bounded.index_to_combination(20, 3)


@pytest.mark.parametrize("alleles", [[], [1, 0], [-1, 2], [0, 2, 1]])
def test_combination_to_index_rejects_invalid(alleles, ploidy_index):
    with pytest.raises(InvalidArgumentError):
        ploidy_index.combination_to_index(alleles)


def test_genotype_index_sorts_called_alleles():
    assert genotype_index([2, 1]) == 4
    assert genotype_index([1]) == 1
    assert genotype_index([3, 1, 2]) == 14
    assert genotype_index((9, 7, 5, 3, 1)) == 1539
