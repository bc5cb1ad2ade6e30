"""Platform, dependency and structure analysis for source repositories."""

from .models import (
    ArchitecturePatterns,
    BuildCommands,
    DependencyInfo,
    PlatformInfo,
    PlatformType,
    ProjectAnalysis,
    ProjectStructure,
    TestStructure,
)
from .orchestrator import ProjectAnalyzer, analyze
from .repo_index import RepoIndex, TraversalError

__all__ = [
    "ArchitecturePatterns",
    "BuildCommands",
    "DependencyInfo",
    "PlatformInfo",
    "PlatformType",
    "ProjectAnalysis",
    "ProjectAnalyzer",
    "ProjectStructure",
    "RepoIndex",
    "TestStructure",
    "TraversalError",
    "analyze",
]
