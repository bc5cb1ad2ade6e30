"""Platform classification from marker files."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..logging import get_logger
from ..models import Framework, Language, PlatformInfo, PlatformType
from ..repo_index import RepoIndex
from .rules import FRAMEWORK_RULES, LANGUAGE_RULES, PLATFORM_RULES, PlatformRule

_logger = get_logger("platform")


class PlatformDetector:
    """Classifies a repository by walking an ordered list of marker rules.

    The first rule with at least one firing marker wins; simultaneous markers
    of lower-priority rules are ignored rather than weighed.
    """

    def __init__(self, index: RepoIndex, rules: Sequence[PlatformRule] = PLATFORM_RULES) -> None:
        self._index = index
        self._rules = tuple(rules)

    def detect(self) -> PlatformInfo:
        platform_type, evidence = self._classify()
        info = PlatformInfo(
            platform_type=platform_type,
            languages=self._detect_languages(platform_type),
            frameworks=self._detect_frameworks(platform_type),
            evidence=evidence,
        )
        _logger.debug(
            "Classified %s as %s (evidence: %s)",
            self._index.root,
            platform_type.value,
            ", ".join(evidence) or "none",
        )
        return info

    def _classify(self) -> Tuple[PlatformType, Tuple[str, ...]]:
        for rule in self._rules:
            fired: List[str] = []
            for marker in rule.markers:
                label = marker.match(self._index)
                if label is not None:
                    fired.append(label)
            if fired:
                return rule.platform, tuple(fired)
        return PlatformType.UNKNOWN, ()

    def _detect_languages(self, platform: PlatformType) -> Tuple[Language, ...]:
        languages: List[Language] = []
        for language, extensions in LANGUAGE_RULES.get(platform, ()):
            if not extensions or any(self._index.has_extension(ext) for ext in extensions):
                languages.append(language)
        return tuple(languages)

    def _detect_frameworks(self, platform: PlatformType) -> Tuple[Framework, ...]:
        frameworks: List[Framework] = []
        for framework, filenames in FRAMEWORK_RULES.get(platform, ()):
            if not filenames or any(self._index.has_file(name) for name in filenames):
                frameworks.append(framework)
        return tuple(frameworks)


__all__ = ["PlatformDetector"]
