"""Configuration for the likelihood field codec."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

__all__ = ["CodecConfig", "DEFAULT_CONFIG", "MAX_PHRED"]

# Largest PL value written for an infinitely unlikely genotype
MAX_PHRED = 2**31 - 1


class CodecConfig(BaseModel):
    """Textual conventions of the GL and PL fields."""

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(default=",", description="Separator between likelihoods")
    missing_marker: str = Field(default=".", description="Whole-field missing value")
    gl_precision: int = Field(default=2, ge=0, le=17, description="Decimals in GL output")
    max_phred: int = Field(default=MAX_PHRED, ge=1, description="Cap applied to PL output")

    @field_validator("delimiter", "missing_marker")
    @classmethod
    def validate_single_character(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"Expected a single character, got {v!r}")
        if v.isdigit() or v in "+-" or v.isspace():
            raise ValueError(f"{v!r} cannot be told apart from a numeric token")
        return v

    @model_validator(mode="after")
    def validate_distinct(self) -> "CodecConfig":
        if self.delimiter == self.missing_marker:
            raise ValueError(
                f"Delimiter and missing marker must differ (both {self.delimiter!r})"
            )
        return self


DEFAULT_CONFIG = CodecConfig()
