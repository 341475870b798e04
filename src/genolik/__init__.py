"""
genolik - Genotype likelihood codec and combinatorial indexing.

This package converts between the GL (log10) and PL (Phred) likelihood
fields of variant-call records and in-memory likelihood vectors, derives
genotype qualities from them, and maps likelihood indices to and from the
allele combinations they stand for, for any ploidy.

Example usage:
    $ genolik convert --from pl --to gl 93,0,39
    -9.30,0.00,-3.90
"""

__version__ = "1.0.0"

from .codec import LikelihoodCodec
from .config import DEFAULT_CONFIG, CodecConfig
from .core import (
    DiploidIndex,
    GenotypeCountCache,
    PloidyIndex,
    binomial_coefficient,
    genotype_index,
    get_alleles,
    num_likelihoods,
)
from .exceptions import (
    GenolikError,
    InvalidArgumentError,
    MalformedFieldError,
    OutOfRangeError,
)
from .likelihoods import GenotypeLikelihoods
from .models.core import AllelePair, FieldFormat, GenotypeType
from .quality import QualityCalculator, normalize_from_log10

__all__ = [
    "__version__",
    "AllelePair",
    "CodecConfig",
    "DEFAULT_CONFIG",
    "DiploidIndex",
    "FieldFormat",
    "GenolikError",
    "GenotypeCountCache",
    "GenotypeLikelihoods",
    "GenotypeType",
    "InvalidArgumentError",
    "LikelihoodCodec",
    "MalformedFieldError",
    "OutOfRangeError",
    "PloidyIndex",
    "QualityCalculator",
    "binomial_coefficient",
    "genotype_index",
    "get_alleles",
    "normalize_from_log10",
    "num_likelihoods",
]
