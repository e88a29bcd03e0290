"""
Changelog configuration value.

A :class:`Configuration` holds the ordered table of commit types that
are rendered in the changelog, the types and message patterns that are
ignored, and the metadata of the output file. Instances are immutable;
the ``with_*`` methods return updated copies so that one configuration
can be passed explicitly to the classifier, the grouping engine and the
renderer without any shared state.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Pattern, Tuple, Union


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


BREAKING_CHANGES = "breaking_changes"

DEFAULT_PATH = "CHANGELOG.md"
DEFAULT_HEADER_TITLE = "Changelog"
DEFAULT_HEADER_DESCRIPTION = "All notable changes to this project will be documented in this file."


class ConfigError(Exception):
    """Raised when the changelog settings are missing or invalid."""

    pass


@dataclass(frozen=True)
class TypeDefinition:
    """A commit type accepted in the changelog.

    Attributes
    ----------
    code : str
        Conventional Commit type as written in commit heads (``feat``).
    label : str
        Heading used for the type in the rendered changelog.
    description : str
        Optional long form explanation of the type.
    """

    code: str
    label: str
    description: str = ""


# Sorting must be preserved, it is the heading order of the changelog.
PRESET: Tuple[TypeDefinition, ...] = (
    TypeDefinition("feat", "Features", "New features"),
    TypeDefinition("perf", "Performance Improvements", "Code changes that improves performance"),
    TypeDefinition("fix", "Bug Fixes", "Bugs and issues resolution"),
    TypeDefinition("refactor", "Code Refactoring", "A code change that neither fixes a bug nor adds a feature"),
    TypeDefinition("style", "Styles", "Changes that do not affect the meaning of the code"),
    TypeDefinition("test", "Tests", "Adding missing tests or correcting existing tests"),
    TypeDefinition("build", "Builds", "Changes that affect the build system or external dependencies"),
    TypeDefinition("ci", "Continuous Integrations", "Changes to CI configuration files and scripts"),
    TypeDefinition("docs", "Documentation", "Documentation changes"),
    TypeDefinition("chore", "Chores", "Other changes that don't modify the source code or test files"),
    TypeDefinition("revert", "Reverts", "Reverts a previous commit"),
)

BREAKING_PRESET = TypeDefinition(
    BREAKING_CHANGES,
    "⚠ BREAKING CHANGES",
    "Code changes that potentially causes other components to fail",
)

DEFAULT_IGNORE_TYPES: Tuple[str, ...] = ("build", "chore", "ci", "docs", "refactor", "revert", "style", "test")

DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (r"/^chore\(release\):/i",)

_DELIMITED_PATTERN = re.compile(r"^/(?P<body>.*)/(?P<flags>[imsx]*)$", re.DOTALL)
_FLAG_MAP = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}

PatternLike = Union[str, Pattern[str]]


def compile_ignore_pattern(pattern: PatternLike) -> Pattern[str]:
    """Turn a configured ignore entry into a compiled pattern.

    Compiled patterns and delimited regex strings (``/body/flags``) are
    used as they are. Any other string, or a delimited string whose body
    does not compile, is matched literally and case-insensitively.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    match = _DELIMITED_PATTERN.match(pattern)
    if match:
        flags = 0
        for char in match.group("flags"):
            flags |= _FLAG_MAP[char]
        try:
            return re.compile(match.group("body"), flags)
        except re.error as exc:
            logger.debug("Ignore pattern %r is not a valid regex (%s); using it literally", pattern, exc)
    return re.compile(re.escape(pattern), re.IGNORECASE)


def _without_ignored(types: Iterable[TypeDefinition], ignore_types: Iterable[str]) -> Tuple[TypeDefinition, ...]:
    # Breaking changes can never be ignored and always head the table.
    ignored = set(ignore_types) - {BREAKING_CHANGES}
    kept = [t for t in types if t.code not in ignored]
    breaking = [t for t in kept if t.code == BREAKING_CHANGES]
    return tuple(breaking[:1] + [t for t in kept if t.code != BREAKING_CHANGES])


@dataclass(frozen=True)
class Configuration:
    """Immutable changelog configuration."""

    path: str = DEFAULT_PATH
    header_title: str = DEFAULT_HEADER_TITLE
    header_description: str = DEFAULT_HEADER_DESCRIPTION
    types: Tuple[TypeDefinition, ...] = field(
        default_factory=lambda: _without_ignored((BREAKING_PRESET,) + PRESET, DEFAULT_IGNORE_TYPES)
    )
    ignore_types: Tuple[str, ...] = DEFAULT_IGNORE_TYPES
    ignore_patterns: Tuple[Pattern[str], ...] = field(
        default_factory=lambda: tuple(compile_ignore_pattern(p) for p in DEFAULT_IGNORE_PATTERNS)
    )

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------
    def with_types(self, types: Iterable[TypeDefinition]) -> "Configuration":
        """Return a copy using ``types``, minus every ignored type code."""
        return replace(self, types=_without_ignored(types, self.ignore_types))

    def with_ignore_types(self, codes: Iterable[str]) -> "Configuration":
        """Return a copy ignoring ``codes``; they leave the type table at once."""
        codes = tuple(codes)
        return replace(self, ignore_types=codes, types=_without_ignored(self.types, codes))

    def with_ignore_patterns(self, patterns: Iterable[PatternLike]) -> "Configuration":
        """Return a copy whose ignore patterns are ``patterns`` compiled."""
        return replace(self, ignore_patterns=tuple(compile_ignore_pattern(p) for p in patterns))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def type_codes(self) -> List[str]:
        return [t.code for t in self.types]

    def allowed_types(self) -> List[str]:
        """Type codes that commits may declare (everything but breaking changes)."""
        return [t.code for t in self.types if t.code != BREAKING_CHANGES]

    def get_type(self, code: str) -> TypeDefinition:
        for definition in self.types:
            if definition.code == code:
                return definition
        raise KeyError(code)

    def label_for(self, code: str) -> str:
        return self.get_type(code).label

    def description_for(self, code: str) -> str:
        return self.get_type(code).description or ""

    def is_ignored(self, head: str) -> bool:
        """Return True if the raw commit head matches an ignore pattern."""
        return any(pattern.search(head) for pattern in self.ignore_patterns)

    # ------------------------------------------------------------------
    # Construction from user settings
    # ------------------------------------------------------------------
    @staticmethod
    def validate(settings: Any) -> bool:
        """Return True if ``settings`` can be merged into a configuration."""
        return isinstance(settings, Mapping)

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]] = None) -> "Configuration":
        """Build a configuration from defaults merged with ``settings``.

        Recognised keys are ``path``, ``header_title``,
        ``header_description``, ``preset`` (code to ``label`` /
        ``description`` overrides), ``types`` (subset of codes to keep),
        ``ignore_types`` and ``ignore_patterns``.

        Raises
        ------
        ConfigError
            If ``settings`` is not a mapping.
        """
        if settings is None:
            settings = {}
        if not cls.validate(settings):
            logger.error("Changelog settings must be a mapping, got %s", type(settings).__name__)
            raise ConfigError("Changelog settings must be a mapping")

        preset: Dict[str, TypeDefinition] = {BREAKING_CHANGES: BREAKING_PRESET}
        preset.update((t.code, t) for t in PRESET)
        for code, override in (settings.get("preset") or {}).items():
            base = preset.get(code, TypeDefinition(code, code))
            preset[code] = TypeDefinition(
                code,
                override.get("label", base.label),
                override.get("description", base.description),
            )

        wanted = settings.get("types")
        if wanted:
            preset = {
                code: definition
                for code, definition in preset.items()
                if code in wanted or code == BREAKING_CHANGES
            }
        breaking = preset.pop(BREAKING_CHANGES)

        ignore_types = settings.get("ignore_types")
        # Only a missing key keeps the defaults; an explicit empty list ignores nothing.
        if ignore_types is None:
            ignore_types = DEFAULT_IGNORE_TYPES
        ignore_patterns = settings.get("ignore_patterns")
        if ignore_patterns is None:
            ignore_patterns = DEFAULT_IGNORE_PATTERNS

        config = cls(
            path=settings.get("path", DEFAULT_PATH),
            header_title=settings.get("header_title", DEFAULT_HEADER_TITLE),
            header_description=settings.get("header_description", DEFAULT_HEADER_DESCRIPTION),
        )
        config = config.with_ignore_patterns(ignore_patterns)
        config = config.with_ignore_types(ignore_types)
        config = config.with_types((breaking,) + tuple(preset.values()))
        logger.debug("Changelog types: %s", ", ".join(config.type_codes()))
        return config
