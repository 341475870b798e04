"""
Likelihood indexing for arbitrary ploidy.

A genotype is a non-decreasing tuple of ``ploidy`` allele indices
``(k_1, ..., k_p)``. Its position in the likelihood vector is given by the
combinatorial number system for multisets::

    index = sum_{m=1..p} C(k_m + m - 1, m)

which orders genotypes by their last (highest) allele first, then by the
one before it, and so on. For ploidy 2 this reduces to the triangular
numbering in :mod:`genolik.core.diploid`, which is used as a fast path.
"""

from collections.abc import Sequence
from itertools import combinations_with_replacement

from ..exceptions import InvalidArgumentError, OutOfRangeError
from .combinatorics import binomial_coefficient
from .diploid import (
    DEFAULT_DIPLOID_INDEX,
    MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED,
    DiploidIndex,
)

__all__ = ["PloidyIndex", "genotype_index", "get_alleles"]


class PloidyIndex:
    """
    Bidirectional likelihood index <-> allele combination mapping.

    Args:
        max_allele_index: Largest allele index a decoded combination may
            contain. ``None`` leaves decoding unbounded.
        diploid: Diploid table used for the ploidy 2 fast path.
    """

    def __init__(self, max_allele_index: int | None = None, diploid: DiploidIndex | None = None):
        if max_allele_index is not None and max_allele_index < 0:
            raise InvalidArgumentError(f"max_allele_index must be >= 0, got {max_allele_index}")
        self.max_allele_index = max_allele_index
        self.diploid = diploid if diploid is not None else DEFAULT_DIPLOID_INDEX

    @staticmethod
    def combination_to_index(alleles: Sequence[int]) -> int:
        """
        Likelihood index of a non-decreasing allele combination.

        Raises:
            InvalidArgumentError: For an empty, negative or decreasing combination.
        """
        _check_combination(alleles)
        index = 0
        for m, allele in enumerate(alleles, start=1):
            if allele == 0:
                continue
            index += binomial_coefficient(allele + m - 1, m)
        return index

    def index_to_combination(self, index: int, ploidy: int) -> tuple[int, ...]:
        """
        Allele combination stored at a likelihood index.

        Positions are resolved from the highest down: each takes the largest
        allele ``a`` with ``C(a + position - 1, position)`` not above the
        remaining index, which is then reduced by that coefficient.

        Raises:
            OutOfRangeError: If the index is negative, the ploidy is below 1,
                or the combination uses an allele above ``max_allele_index``.
        """
        if ploidy < 1:
            raise OutOfRangeError(f"Cannot decode a PL index for ploidy {ploidy}")
        if index < 0:
            raise OutOfRangeError(f"The PL index {index} cannot be negative")

        alleles = [0] * ploidy
        remaining = index
        for position in range(ploidy, 0, -1):
            allele = _largest_allele(remaining, position)
            alleles[position - 1] = allele
            remaining -= binomial_coefficient(allele + position - 1, position)

        self._check_bound(index, alleles[-1])
        return tuple(alleles)

    def genotype_index(self, alleles: Sequence[int]) -> int:
        """Likelihood index of a called genotype given in any order."""
        ordered = sorted(alleles)
        if len(ordered) == 2:
            return self.diploid.to_index(ordered[0], ordered[1])
        return self.combination_to_index(ordered)

    def get_alleles(self, index: int, ploidy: int) -> tuple[int, ...]:
        """Decode an index, using the diploid table when ploidy is 2."""
        if ploidy == 2:
            if index < 0:
                raise OutOfRangeError(f"The PL index {index} cannot be negative")
            pair = self.diploid.from_index(index)
            self._check_bound(index, pair.allele2)
            return pair.alleles
        return self.index_to_combination(index, ploidy)

    def enumerate_combinations(self, num_alleles: int, ploidy: int) -> list[tuple[int, ...]]:
        """Every genotype of a site, in likelihood order."""
        if num_alleles < 1 or ploidy < 1:
            raise InvalidArgumentError(
                f"num_alleles and ploidy must be >= 1, got {num_alleles} and {ploidy}"
            )
        combinations = combinations_with_replacement(range(num_alleles), ploidy)
        return sorted(combinations, key=lambda c: c[::-1])

    def _check_bound(self, index: int, highest_allele: int) -> None:
        if self.max_allele_index is not None and highest_allele > self.max_allele_index:
            raise OutOfRangeError(
                f"The PL index {index} implies allele {highest_allele}, "
                f"above the maximum allele index {self.max_allele_index}"
            )


def _check_combination(alleles: Sequence[int]) -> None:
    if len(alleles) == 0:
        raise InvalidArgumentError("An allele combination needs at least one allele")
    previous = 0
    for allele in alleles:
        if allele < 0:
            raise InvalidArgumentError(f"Allele indices must be >= 0, got {list(alleles)}")
        if allele < previous:
            raise InvalidArgumentError(f"Allele indices must be non-decreasing, got {list(alleles)}")
        previous = allele


def _largest_allele(remaining: int, position: int) -> int:
    """Largest a with C(a + position - 1, position) <= remaining."""
    if position == 1:
        return remaining

    # C(a + position - 1, position) is 0 at a = 0 and increasing in a
    low, high = 0, 1
    while binomial_coefficient(high + position - 1, position) <= remaining:
        low, high = high, high * 2
    while high - low > 1:
        mid = (low + high) // 2
        if binomial_coefficient(mid + position - 1, position) <= remaining:
            low = mid
        else:
            high = mid
    return low


_default_index = PloidyIndex()
# Diploid decodes stop at the genotypes of the largest site the table covers
_default_diploid_index = PloidyIndex(max_allele_index=MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED)


def genotype_index(alleles: Sequence[int]) -> int:
    """Shorthand for ``PloidyIndex.genotype_index`` on the unbounded default index."""
    return _default_index.genotype_index(alleles)


def get_alleles(index: int, ploidy: int) -> tuple[int, ...]:
    """
    Shorthand for ``PloidyIndex.get_alleles`` on the default index.

    Diploid indices past the genotypes of a site with
    ``MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED`` alternate alleles
    raise ``OutOfRangeError``; other ploidies are unbounded. Use an explicit
    ``PloidyIndex`` to decode larger diploid indices.
    """
    if ploidy == 2:
        return _default_diploid_index.get_alleles(index, ploidy)
    return _default_index.get_alleles(index, ploidy)
