"""
Core module for genolik.

Provides the combinatorics, genotype counts and likelihood index mappings.
"""

from .combinatorics import binomial_coefficient, multiset_coefficient
from .counts import GenotypeCountCache, num_likelihoods
from .diploid import (
    MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED,
    DiploidIndex,
    calculate_pl_index,
    get_allele_pair,
)
from .ploidy import PloidyIndex, genotype_index, get_alleles

__all__ = [
    "MAX_DIPLOID_ALT_ALLELES_THAT_CAN_BE_GENOTYPED",
    "DiploidIndex",
    "GenotypeCountCache",
    "PloidyIndex",
    "binomial_coefficient",
    "calculate_pl_index",
    "genotype_index",
    "get_allele_pair",
    "get_alleles",
    "multiset_coefficient",
    "num_likelihoods",
]
