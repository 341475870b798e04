"""
GL / PL field codec.

Converts the two textual likelihood encodings of a variant-call record into
a vector of log10 likelihoods and back:

- GL: raw log10 likelihoods, e.g. ``-10.50,-1.25,-5.11``
- PL: Phred-scaled likelihoods normalised so the best genotype is 0,
  e.g. ``93,0,39``

A field made only of the missing marker (``.`` or ``.,.,.``) is the missing
vector, represented as ``None``. Fields are validated eagerly: a malformed
field is rejected when it is parsed, never on first use.
"""

import logging
import math
import operator
import re
from collections.abc import Sequence

import numpy as np

from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import MalformedFieldError

logger = logging.getLogger(__name__)

__all__ = ["LikelihoodCodec", "as_likelihood_vector"]

_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_PHRED_PATTERN = re.compile(r"\d+")

# Special float spellings, compared after lower-casing
_SPECIAL_FLOATS = {
    "nan": math.nan,
    "+nan": math.nan,
    "-nan": math.nan,
    "inf": math.inf,
    "+inf": math.inf,
    "-inf": -math.inf,
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
}


def as_likelihood_vector(values) -> np.ndarray:
    """Read-only float64 copy of a one-dimensional sequence of log10 likelihoods."""
    vector = np.array(values, dtype=np.float64)
    if vector.ndim != 1:
        raise ValueError(f"Expected a one-dimensional likelihood vector, got shape {vector.shape}")
    vector.setflags(write=False)
    return vector


class LikelihoodCodec:
    """Parses and formats GL and PL fields."""

    def __init__(self, config: CodecConfig = DEFAULT_CONFIG):
        self.config = config

    # -- parsing --

    def parse_log_field(self, text: str) -> np.ndarray | None:
        """
        Parse a GL field into log10 likelihoods.

        Tokens are decimal numbers or, in any case, ``nan``, ``inf`` and
        ``infinity`` with an optional sign.

        Raises:
            MalformedFieldError: On an unparseable token or a field mixing
                the missing marker with values.
        """
        tokens = self._tokenize(text)
        if tokens is None:
            return None
        return as_likelihood_vector([self._parse_log_token(token, text) for token in tokens])

    def parse_phred_field(self, text: str) -> np.ndarray | None:
        """
        Parse a PL field into log10 likelihoods (``PL / -10``).

        Raises:
            MalformedFieldError: On a token that is not a non-negative integer
                or a field mixing the missing marker with values.
        """
        tokens = self._tokenize(text)
        if tokens is None:
            return None
        return as_likelihood_vector([self._parse_phred_token(token, text) for token in tokens])

    def from_pls(self, pls: Sequence[int]) -> np.ndarray:
        """Log10 likelihoods of already-parsed PL values."""
        values = []
        for pl in pls:
            try:
                value = operator.index(pl)
            except TypeError:
                value = -1
            if isinstance(pl, bool) or value < 0:
                raise MalformedFieldError(f"PL values must be non-negative integers, got {pl!r}")
            try:
                values.append(-value / 10.0)
            except OverflowError as e:
                raise MalformedFieldError(
                    f"PL value of {value.bit_length()} bits is too large to represent"
                ) from e
        return as_likelihood_vector(values)

    def _tokenize(self, text: str) -> list[str] | None:
        """Split a field, returning None for an all-missing field."""
        tokens = text.split(self.config.delimiter)
        # trailing empty tokens are not values
        while len(tokens) > 1 and tokens[-1] == "":
            tokens.pop()

        marker = self.config.missing_marker
        n_missing = sum(1 for token in tokens if token == marker)
        if n_missing == len(tokens):
            return None
        if n_missing:
            logger.debug("Rejecting partially missing likelihood field %r", text)
            raise MalformedFieldError(
                f"The likelihood field {text!r} mixes missing and present values", field=text
            )
        return tokens

    def _parse_log_token(self, token: str, text: str) -> float:
        special = _SPECIAL_FLOATS.get(token.lower())
        if special is not None:
            return special
        if _DECIMAL_PATTERN.fullmatch(token) is None:
            logger.debug("Rejecting GL token %r in %r", token, text)
            raise MalformedFieldError(
                f"The GL field {text!r} contains a non-numeric value {token!r}", field=text
            )
        return float(token)

    def _parse_phred_token(self, token: str, text: str) -> float:
        if _PHRED_PATTERN.fullmatch(token) is None:
            logger.debug("Rejecting PL token %r in %r", token, text)
            raise MalformedFieldError(
                f"The PL field {text!r} contains a value that is not a non-negative integer: {token!r}",
                field=text,
            )
        try:
            return -int(token) / 10.0
        except (OverflowError, ValueError) as e:
            # past the float range, or past the interpreter's digit limit
            raise MalformedFieldError(
                f"PL value {token[:20]}... ({len(token)} digits) is too large to represent",
                field=text,
            ) from e

    # -- formatting --

    def to_pls(self, vector: np.ndarray | None) -> list[int] | None:
        """
        Phred-scaled likelihoods normalised to the best genotype.

        Each value is ``round(-10 * (v - max(v)))`` with halves rounded away
        from zero. NaN likelihoods become 0 and infinitely unlikely genotypes
        are capped at ``config.max_phred``.
        """
        if vector is None:
            return None
        values = np.asarray(vector, dtype=np.float64)
        if values.size == 0:
            return []

        present = values[~np.isnan(values)]
        best = present.max() if present.size else 0.0
        with np.errstate(invalid="ignore"):
            scaled = -10.0 * (values - best)
        scaled = np.where(np.isnan(scaled), 0.0, scaled)
        scaled = np.minimum(scaled, float(self.config.max_phred))
        return [int(pl) for pl in _round_half_away_from_zero(scaled)]

    def to_phred_field(self, vector: np.ndarray | None) -> str:
        """Format a vector as a PL field."""
        pls = self.to_pls(vector)
        if pls is None:
            return self.config.missing_marker
        return self.config.delimiter.join(str(pl) for pl in pls)

    def to_log_field(self, vector: np.ndarray | None) -> str:
        """Format a vector as a GL field, without normalisation."""
        if vector is None:
            return self.config.missing_marker
        precision = self.config.gl_precision
        return self.config.delimiter.join(f"{v:.{precision}f}" for v in np.asarray(vector, dtype=np.float64))


def _round_half_away_from_zero(values: np.ndarray) -> np.ndarray:
    # floor/fraction split avoids the x + 0.5 error just below one half
    magnitude = np.abs(values)
    whole = np.floor(magnitude)
    rounded = np.where(magnitude - whole >= 0.5, whole + 1.0, whole)
    return np.copysign(rounded, values)
