"""
Diploid likelihood indexing.

For ploidy 2 the likelihood of genotype a1/a2 (a1 <= a2) is stored at
``a2 * (a2 + 1) / 2 + a1``, so genotypes are ordered by their higher allele
and then by their lower allele::

    0 -> 0/0, 1 -> 0/1, 2 -> 1/1, 3 -> 0/2, 4 -> 1/2, 5 -> 2/2, ...

Decoding uses a precomputed table for the indices of sites with up to
``MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED`` alternate alleles and an
integer square root beyond it.
"""

import logging
import math

from ..exceptions import InvalidArgumentError, OutOfRangeError
from ..models.core import AllelePair
from .counts import num_likelihoods

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_DIPLOID_INDEX",
    "MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED",
    "DiploidIndex",
    "calculate_pl_index",
    "get_allele_pair",
]

MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED = 50


class DiploidIndex:
    """Bidirectional PL index <-> allele pair mapping for ploidy 2."""

    def __init__(self, max_alt_alleles: int = MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED):
        if max_alt_alleles < 0:
            raise InvalidArgumentError(f"max_alt_alleles must be >= 0, got {max_alt_alleles}")
        self.max_alt_alleles = max_alt_alleles
        self._table = self._build_table(max_alt_alleles + 1)
        logger.debug("Built diploid PL index table with %d entries", len(self._table))

    @staticmethod
    def _build_table(num_alleles: int) -> tuple[AllelePair, ...]:
        table = []
        for allele2 in range(num_alleles):
            for allele1 in range(allele2 + 1):
                table.append(AllelePair(allele1=allele1, allele2=allele2))
        if len(table) != num_likelihoods(num_alleles, 2):
            raise RuntimeError("Diploid PL table size does not match the genotype count")
        return tuple(table)

    @property
    def table_size(self) -> int:
        return len(self._table)

    @staticmethod
    def to_index(allele1: int, allele2: int) -> int:
        """
        PL index of the genotype allele1/allele2.

        Raises:
            InvalidArgumentError: Unless 0 <= allele1 <= allele2.
        """
        if allele1 < 0 or allele1 > allele2:
            raise InvalidArgumentError(
                f"Expected 0 <= allele1 <= allele2, got allele1={allele1}, allele2={allele2}"
            )
        return allele2 * (allele2 + 1) // 2 + allele1

    def from_index(self, index: int, num_alleles: int | None = None) -> AllelePair:
        """
        Allele pair stored at a PL index.

        Args:
            index: PL index, >= 0.
            num_alleles: If given, reject pairs using an allele >= num_alleles.

        Raises:
            OutOfRangeError: If the index is negative or exceeds the site's alleles.
        """
        if index < 0:
            raise OutOfRangeError(f"The PL index {index} cannot be negative")
        if index < len(self._table):
            pair = self._table[index]
        else:
            pair = self.from_index_closed_form(index)
        if num_alleles is not None and pair.allele2 >= num_alleles:
            raise OutOfRangeError(
                f"The PL index {index} implies allele {pair.allele2}, "
                f"but the site only has {num_alleles} alleles"
            )
        return pair

    @staticmethod
    def from_index_closed_form(index: int) -> AllelePair:
        """Decode without the table: allele2 is the largest a with a(a+1)/2 <= index."""
        if index < 0:
            raise OutOfRangeError(f"The PL index {index} cannot be negative")
        allele2 = (math.isqrt(8 * index + 1) - 1) // 2
        allele1 = index - allele2 * (allele2 + 1) // 2
        return AllelePair(allele1=allele1, allele2=allele2)

    @classmethod
    def bi_allelic_indices(cls, allele1: int, allele2: int) -> tuple[int, int, int]:
        """
        PL indices of the three genotypes formed by two alleles.

        Returns the indices of allele1/allele1, allele1/allele2 and
        allele2/allele2, which select the biallelic likelihoods for that
        allele pair out of a multi-allelic diploid vector.
        """
        low, high = sorted((allele1, allele2))
        return (
            cls.to_index(allele1, allele1),
            cls.to_index(low, high),
            cls.to_index(allele2, allele2),
        )


DEFAULT_DIPLOID_INDEX = DiploidIndex()


def calculate_pl_index(allele1: int, allele2: int) -> int:
    """Shorthand for ``DiploidIndex.to_index``."""
    return DiploidIndex.to_index(allele1, allele2)


def get_allele_pair(index: int, num_alleles: int | None = None) -> AllelePair:
    """Decode a PL index with the default table."""
    return DEFAULT_DIPLOID_INDEX.from_index(index, num_alleles=num_alleles)
