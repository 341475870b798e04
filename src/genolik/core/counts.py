"""
Memoized genotype counts.

The number of genotypes for a site with ``num_alleles`` alleles and a given
ploidy is the number of multisets of size ``ploidy`` drawn from the alleles.
Counts are requested for every record, so they are cached per key.
"""

import logging
from threading import Lock

from ..exceptions import InvalidArgumentError
from .combinatorics import multiset_coefficient

logger = logging.getLogger(__name__)

__all__ = ["GenotypeCountCache", "num_likelihoods"]


class GenotypeCountCache:
    """
    Thread-safe (num_alleles, ploidy) -> genotype count table.

    Reads never take the lock. A miss computes the count outside the lock
    and publishes it with ``setdefault``, so two threads racing on the same
    key may both compute it but only the first value is ever visible.
    """

    def __init__(self) -> None:
        self._counts: dict[tuple[int, int], int] = {}
        self._lock = Lock()

    def get(self, num_alleles: int, ploidy: int) -> int:
        """
        Number of likelihoods for a genotype with the given alleles and ploidy.

        Args:
            num_alleles: Number of alleles at the site, including the reference.
            ploidy: Number of allele copies per genotype.

        Raises:
            InvalidArgumentError: If either argument is below 1.
        """
        if num_alleles < 1:
            raise InvalidArgumentError(f"num_alleles must be >= 1, got {num_alleles}")
        if ploidy < 1:
            raise InvalidArgumentError(f"ploidy must be >= 1, got {ploidy}")

        key = (num_alleles, ploidy)
        count = self._counts.get(key)
        if count is not None:
            return count

        count = multiset_coefficient(num_alleles, ploidy)
        with self._lock:
            count = self._counts.setdefault(key, count)
        logger.debug("Cached genotype count for %d alleles, ploidy %d: %d", num_alleles, ploidy, count)
        return count

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __len__(self) -> int:
        return len(self._counts)


_default_cache = GenotypeCountCache()


def num_likelihoods(num_alleles: int, ploidy: int, cache: GenotypeCountCache | None = None) -> int:
    """Genotype count looked up in ``cache`` (the process-wide cache by default)."""
    if cache is None:
        cache = _default_cache
    return cache.get(num_alleles, ploidy)
