"""
Genotype quality from a likelihood vector.

The quality of a genotype is the log10 probability that it is the wrong
call. For the most likely genotype that probability is ``1 - p(best)``,
which loses all precision in floating point exactly when the call is
confident. It is approximated instead by the log10 likelihood ratio of the
runner-up to the best genotype; when the vector is max-normalised (as every
vector parsed from a PL field is) this is simply the runner-up's value.
For a vector that is not max-normalised the result is the gap between the
two, not the runner-up's raw value: ``[-10.5, -1.25, -5.11]`` gives -3.86
for the best genotype rather than -5.11.
"""

import math
from collections.abc import Hashable, Sequence

import numpy as np

from .core.ploidy import PloidyIndex
from .exceptions import InvalidArgumentError, OutOfRangeError
from .models.core import GenotypeType

__all__ = ["QualityCalculator", "normalize_from_log10", "phred_scaled"]


def normalize_from_log10(vector: np.ndarray) -> np.ndarray:
    """
    Convert log10 likelihoods to probabilities summing to one.

    Values are shifted by their maximum before exponentiation so that very
    negative likelihoods do not all underflow to zero.
    """
    values = np.asarray(vector, dtype=np.float64)
    linear = np.power(10.0, values - values.max())
    return linear / linear.sum()


def phred_scaled(log10_value: float) -> float:
    """Phred scale (``-10 * log10``) of a log10 quality."""
    return -10.0 * log10_value


class QualityCalculator:
    """
    Derives log10 genotype qualities from likelihood vectors.

    Args:
        index: Mapping used to locate allele combinations in a vector.
    """

    def __init__(self, index: PloidyIndex | None = None):
        self.index = index if index is not None else PloidyIndex()

    def quality_of(self, vector: np.ndarray | None, genotype_index: int) -> float:
        """
        Log10 probability that the genotype at ``genotype_index`` is wrong.

        Returns ``-inf`` for a missing vector.

        Raises:
            OutOfRangeError: If the index is outside the vector.
        """
        if vector is None:
            return -math.inf
        values = np.asarray(vector, dtype=np.float64)
        if not 0 <= genotype_index < values.size:
            raise OutOfRangeError(
                f"Genotype index {genotype_index} is outside a vector of {values.size} likelihoods"
            )

        others = np.delete(values, genotype_index)
        runner_up = others.max() if others.size else -math.inf
        gap = values[genotype_index] - runner_up
        if gap < 0:
            # not the most likely genotype, 1 - p is far from 1 here
            normalized = normalize_from_log10(values)
            return float(np.log10(1.0 - normalized[genotype_index]))
        return float(-gap)

    def quality_of_alleles(
        self, vector: np.ndarray | None, alleles: Sequence[int], ploidy: int | None = None
    ) -> float:
        """
        Quality of a genotype given as its allele indices, in any order.

        Raises:
            InvalidArgumentError: If the number of alleles differs from ``ploidy``.
        """
        if ploidy is not None and len(alleles) != ploidy:
            raise InvalidArgumentError(
                f"Genotype {list(alleles)} does not have ploidy {ploidy}"
            )
        return self.quality_of(vector, self.index.genotype_index(alleles))

    def quality_of_called(
        self,
        vector: np.ndarray | None,
        called_alleles: Sequence[Hashable],
        site_alleles: Sequence[Hashable],
    ) -> float:
        """
        Quality of a called genotype given as allele labels.

        Args:
            vector: Likelihoods of the site.
            called_alleles: Alleles of the genotype, e.g. ``["C", "T"]``.
            site_alleles: All alleles of the site, reference first.

        Raises:
            InvalidArgumentError: If a called allele is not a site allele.
        """
        site_index = {allele: i for i, allele in enumerate(site_alleles)}
        try:
            alleles = [site_index[allele] for allele in called_alleles]
        except KeyError as e:
            raise InvalidArgumentError(
                f"Allele {e.args[0]!r} is not one of the site alleles {list(site_alleles)}"
            ) from e
        return self.quality_of_alleles(vector, alleles)

    def quality_of_type(self, vector: np.ndarray | None, genotype_type: GenotypeType) -> float:
        """Quality of a biallelic diploid genotype category."""
        return self.quality_of(vector, genotype_type.likelihood_index)

    def as_map(self, vector: np.ndarray | None, linear_scale: bool = False) -> dict[GenotypeType, float] | None:
        """
        Likelihoods of the three biallelic diploid genotypes.

        Args:
            vector: Log10 likelihoods.
            linear_scale: Return normalised probabilities instead of log10 values.

        Returns:
            Mapping of HOM_REF, HET and HOM_VAR to the first three likelihoods,
            or None for a missing vector.
        """
        if vector is None:
            return None
        values = np.asarray(vector, dtype=np.float64)
        if values.size < len(GenotypeType):
            raise InvalidArgumentError(
                f"Need at least {len(GenotypeType)} likelihoods, got {values.size}"
            )
        if linear_scale:
            values = normalize_from_log10(values)
        return {gt: float(values[gt.likelihood_index]) for gt in GenotypeType}
