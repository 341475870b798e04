"""
Core data models for genolik.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GenotypeType(str, Enum):
    """Diploid biallelic genotype category."""

    HOM_REF = "HOM_REF"
    HET = "HET"
    HOM_VAR = "HOM_VAR"

    @property
    def likelihood_index(self) -> int:
        """Position of this genotype in a biallelic diploid likelihood vector."""
        return _LIKELIHOOD_INDEX[self]


_LIKELIHOOD_INDEX = {
    GenotypeType.HOM_REF: 0,
    GenotypeType.HET: 1,
    GenotypeType.HOM_VAR: 2,
}


class AllelePair(BaseModel):
    """
    The two allele indices of a diploid genotype, ordered so that
    allele1 <= allele2.
    """

    model_config = ConfigDict(frozen=True)

    allele1: int = Field(ge=0, description="Lower allele index")
    allele2: int = Field(ge=0, description="Higher allele index")

    @model_validator(mode="after")
    def validate_order(self) -> "AllelePair":
        if self.allele1 > self.allele2:
            raise ValueError(
                f"allele1 ({self.allele1}) must be <= allele2 ({self.allele2})"
            )
        return self

    @property
    def alleles(self) -> tuple[int, int]:
        return (self.allele1, self.allele2)


class FieldFormat(str, Enum):
    """Textual likelihood encoding."""

    GL = "gl"
    PL = "pl"
