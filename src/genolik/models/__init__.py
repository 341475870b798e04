"""
Data models for genolik.

Provides Pydantic models and enums shared by the index math and codec layers.
"""

from .core import AllelePair, FieldFormat, GenotypeType

__all__ = [
    "AllelePair",
    "FieldFormat",
    "GenotypeType",
]
