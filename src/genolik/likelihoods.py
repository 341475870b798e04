"""
Genotype likelihoods of one sample at one site.

``GenotypeLikelihoods`` wraps an immutable log10 likelihood vector (or the
missing state) together with the codec that formats it, and exposes the
quality queries of :class:`~genolik.quality.QualityCalculator`.

Example:
    >>> gl = GenotypeLikelihoods.from_pl_field("93,0,39")
    >>> gl.as_gl_string()
    '-9.30,0.00,-3.90'
    >>> gl.log10_gq(1)
    -3.9
"""

import math
from collections.abc import Hashable, Sequence

import numpy as np

from .codec import LikelihoodCodec, as_likelihood_vector
from .core.counts import GenotypeCountCache, num_likelihoods
from .models.core import GenotypeType
from .quality import QualityCalculator

__all__ = ["GenotypeLikelihoods"]

_DEFAULT_CODEC = LikelihoodCodec()
_DEFAULT_CALCULATOR = QualityCalculator()


class GenotypeLikelihoods:
    """Immutable log10 genotype likelihoods, or missing."""

    __slots__ = ("_vector", "_codec", "_calculator")

    def __init__(
        self,
        vector: np.ndarray | None,
        codec: LikelihoodCodec | None = None,
        calculator: QualityCalculator | None = None,
    ):
        self._vector = None if vector is None else as_likelihood_vector(vector)
        self._codec = codec if codec is not None else _DEFAULT_CODEC
        self._calculator = calculator if calculator is not None else _DEFAULT_CALCULATOR

    # -- construction --

    @classmethod
    def from_gl_field(cls, text: str, codec: LikelihoodCodec | None = None) -> "GenotypeLikelihoods":
        codec = codec if codec is not None else _DEFAULT_CODEC
        return cls(codec.parse_log_field(text), codec=codec)

    @classmethod
    def from_pl_field(cls, text: str, codec: LikelihoodCodec | None = None) -> "GenotypeLikelihoods":
        codec = codec if codec is not None else _DEFAULT_CODEC
        return cls(codec.parse_phred_field(text), codec=codec)

    @classmethod
    def from_log10_likelihoods(cls, values: Sequence[float]) -> "GenotypeLikelihoods":
        return cls(as_likelihood_vector(values))

    @classmethod
    def from_pls(cls, pls: Sequence[int], codec: LikelihoodCodec | None = None) -> "GenotypeLikelihoods":
        codec = codec if codec is not None else _DEFAULT_CODEC
        return cls(codec.from_pls(pls), codec=codec)

    # -- accessors --

    @property
    def is_missing(self) -> bool:
        return self._vector is None

    def as_vector(self) -> np.ndarray | None:
        """The read-only log10 likelihoods, or None when missing."""
        return self._vector

    def as_pls(self) -> list[int] | None:
        return self._codec.to_pls(self._vector)

    def as_pl_string(self) -> str:
        return self._codec.to_phred_field(self._vector)

    def as_gl_string(self) -> str:
        return self._codec.to_log_field(self._vector)

    def as_map(self, linear_scale: bool = False) -> dict[GenotypeType, float] | None:
        return self._calculator.as_map(self._vector, linear_scale=linear_scale)

    def has_expected_length(
        self, num_alleles: int, ploidy: int, cache: GenotypeCountCache | None = None
    ) -> bool:
        """Whether the vector holds one likelihood per genotype of the site."""
        if self._vector is None:
            return False
        return len(self._vector) == num_likelihoods(num_alleles, ploidy, cache=cache)

    # -- qualities --

    def log10_gq(self, genotype_index: int) -> float:
        return self._calculator.quality_of(self._vector, genotype_index)

    def log10_gq_of_type(self, genotype_type: GenotypeType) -> float:
        return self._calculator.quality_of_type(self._vector, genotype_type)

    def log10_gq_of_alleles(self, alleles: Sequence[int], ploidy: int | None = None) -> float:
        return self._calculator.quality_of_alleles(self._vector, alleles, ploidy=ploidy)

    def log10_gq_of_called(
        self, called_alleles: Sequence[Hashable], site_alleles: Sequence[Hashable]
    ) -> float:
        return self._calculator.quality_of_called(self._vector, called_alleles, site_alleles)

    # -- protocol --

    def __len__(self) -> int:
        return 0 if self._vector is None else len(self._vector)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenotypeLikelihoods):
            return NotImplemented
        if self._vector is None or other._vector is None:
            return self._vector is None and other._vector is None
        return bool(np.array_equal(self._vector, other._vector, equal_nan=True))

    def __hash__(self) -> int:
        if self._vector is None:
            return hash(None)
        return hash(tuple(None if math.isnan(v) else v for v in self._vector.tolist()))

    def __str__(self) -> str:
        return self.as_pl_string()

    def __repr__(self) -> str:
        if self._vector is None:
            return "GenotypeLikelihoods(missing)"
        return f"GenotypeLikelihoods({self.as_gl_string()})"
