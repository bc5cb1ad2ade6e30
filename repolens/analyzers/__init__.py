"""Analyzer implementations consuming a shared RepoIndex."""

from __future__ import annotations

from .base import ManifestExtractor
from .dependencies import DependencyAnalyzer
from .platform import PlatformDetector
from .structure import StructureAnalyzer

__all__ = [
    "DependencyAnalyzer",
    "ManifestExtractor",
    "PlatformDetector",
    "StructureAnalyzer",
]
