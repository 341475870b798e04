"""
Exact binomial coefficients for genotype index math.

Python integers are arbitrary precision, so coefficients for large ploidy
and allele counts are exact and never wrap around.
"""

import math
import operator

from ..exceptions import InvalidArgumentError

__all__ = ["binomial_coefficient", "multiset_coefficient"]


def _as_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)
    except TypeError as e:
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}") from e


def binomial_coefficient(n: int, k: int) -> int:
    """
    Number of ways to choose k items from n.

    Args:
        n: Size of the set.
        k: Size of the subset.

    Returns:
        C(n, k), or 0 when k < 0 or k > n.
    """
    n = _as_int(n, "n")
    k = _as_int(k, "k")
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


def multiset_coefficient(n: int, k: int) -> int:
    """Number of multisets of size k drawn from n distinct items."""
    return binomial_coefficient(n + k - 1, k)
