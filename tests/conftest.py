"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to path so tests use local code, not installed package
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from genolik.codec import LikelihoodCodec  # noqa: E402
from genolik.core.counts import GenotypeCountCache  # noqa: E402
from genolik.core.ploidy import PloidyIndex  # noqa: E402
from genolik.quality import QualityCalculator  # noqa: E402


@pytest.fixture
def codec() -> LikelihoodCodec:
    return LikelihoodCodec()


@pytest.fixture
def count_cache() -> GenotypeCountCache:
    """A fresh cache, isolated from the process-wide one."""
    return GenotypeCountCache()


@pytest.fixture
def ploidy_index() -> PloidyIndex:
    return PloidyIndex()


@pytest.fixture
def calculator(ploidy_index: PloidyIndex) -> QualityCalculator:
    return QualityCalculator(ploidy_index)
