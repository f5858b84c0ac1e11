"""Semantic versioning utilities.

Version directory names are parsed into :class:`semantic_version.Version`
objects and ordered by semantic-version precedence. Range expressions
written in the usual constraint grammar are translated into groups of
comparators checked against that precedence.
"""

import operator
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, TypeVar

from semantic_version import Version

from verman.exceptions import InvalidConstraintError

T = TypeVar("T")

WILDCARDS = frozenset({"*", "x", "X"})

# Operators allowed in front of a bare wildcard ("*", ">=*", "^x", ...).
_ANY_OPERATORS = frozenset({"", "=", "==", ">=", "^", "~", "~>"})

_PART = r"[0-9]+|[xX*]"
_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_VERSION_RE = re.compile(
    rf"^v?(?P<major>{_PART})(?:\.(?P<minor>{_PART}))?(?:\.(?P<patch>{_PART}))?"
    rf"(?:-(?P<prerelease>{_IDENTIFIERS}))?(?:\+(?P<build>{_IDENTIFIERS}))?$"
)

_HYPHEN_RANGE_RE = re.compile(r"^(?P<lower>[^\s,]+)\s+-\s+(?P<upper>[^\s,]+)$")
_TERM_RE = re.compile(
    r"\s*(?P<op>~>|==|!=|>=|<=|\^|~|=|>|<)?\s*(?P<version>[^\s,<>=!~^|]+)[\s,]*"
)

_OPERATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


def _split_version(text: str) -> tuple[list[str], tuple[str, ...], tuple[str, ...]]:
    """Split "v1.2.x-rc.1+b5" into (["1", "2", "x"], ("rc", "1"), ("b5",))."""
    match = _VERSION_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid semantic version: '{text}'")
    parts = [part for part in match.group("major", "minor", "patch") if part is not None]
    prerelease = tuple(match["prerelease"].split(".")) if match["prerelease"] else ()
    if any(len(p) > 1 and p.isdigit() and p.startswith("0") for p in prerelease):
        raise ValueError(f"Invalid leading zero in pre-release of '{text}'")
    build = tuple(match["build"].split(".")) if match["build"] else ()
    return parts, prerelease, build


def _make_version(numbers: list[int], prerelease: tuple = (), build: tuple = ()) -> Version:
    major, minor, patch = (numbers + [0, 0, 0])[:3]
    return Version(major=major, minor=minor, patch=patch, prerelease=prerelease, build=build)


def parse_version(version_str: str) -> Version:
    """Parse a version string into a Version object.

    A leading "v" is accepted and missing minor or patch components
    default to 0, so "v1.2" parses as 1.2.0.

    Args:
        version_str: Version string (e.g., "1.0.0", "v2.1.0-beta.1").

    Returns:
        Parsed Version object.

    Raises:
        ValueError: If version string is invalid.
    """
    parts, prerelease, build = _split_version(version_str)
    if any(part in WILDCARDS for part in parts):
        raise ValueError(f"Invalid semantic version: '{version_str}'")
    return _make_version([int(part) for part in parts], prerelease, build)


def try_parse_version(version_str: str) -> Optional[Version]:
    """Parse a version string, returning None when it does not conform."""
    try:
        return parse_version(version_str)
    except ValueError:
        return None


@dataclass(frozen=True)
class Comparator:
    """A single ``<operator><version>`` comparison.

    Comparisons use semantic-version precedence, so build metadata is
    ignored. When ``upper`` is set the comparator is a "!=" against the
    whole range ``[version, upper)``.
    """

    operator: str
    version: Version
    upper: Optional[Version] = None

    def check(self, version: Version) -> bool:
        key = version.precedence_key
        if self.upper is not None:
            return not (self.version.precedence_key <= key < self.upper.precedence_key)
        return _OPERATORS[self.operator](key, self.version.precedence_key)


@dataclass(frozen=True)
class VersionConstraint:
    """A parsed version-range expression.

    Attributes:
        expression: The expression as given.
        alternatives: Comparator groups joined by ``||``; a version
            satisfies the constraint when it passes every comparator of
            any group.
    """

    expression: str
    alternatives: tuple[tuple[Comparator, ...], ...]

    def check(self, version: Version) -> bool:
        """Check whether a version satisfies the constraint.

        A pre-release only satisfies a group that names a pre-release of
        the same major.minor.patch, so ">=1.0.0" never selects 2.0.0-rc.1.

        Args:
            version: Version to check.

        Returns:
            True if version satisfies any alternative.
        """
        return any(_group_allows(group, version) for group in self.alternatives)

    def __contains__(self, version: Version) -> bool:
        return self.check(version)


def _group_allows(group: tuple[Comparator, ...], version: Version) -> bool:
    if not all(comparator.check(version) for comparator in group):
        return False
    if not version.prerelease:
        return True
    release = (version.major, version.minor, version.patch)
    return any(
        c.version.prerelease and (c.version.major, c.version.minor, c.version.patch) == release
        for c in group
    )


def parse_constraint(expression: str) -> VersionConstraint:
    """Parse a version-range expression.

    Supports:
    - Exact: "1.0.0", "=1.0.0" or "==1.0.0"
    - Comparison: ">1.0.0", ">=1.0.0", "<2.0.0", "<=2.0.0", "!=1.5.0"
    - Conjunction: ">=1.0.0,<2.0.0" or ">=1.0.0 <2.0.0"
    - Disjunction: "^1.0.0 || ^2.0.0"
    - Caret: "^1.2.3" (>=1.2.3,<2.0.0)
    - Tilde: "~1.2.3" or "~>1.2.3" (>=1.2.3,<1.3.0)
    - Wildcard: "*", "1.x", "1.2.*"; a partial version such as "1.2"
      is the same range as "1.2.x"
    - Hyphen range: "1.2.0 - 1.4.5" (>=1.2.0,<=1.4.5)

    Args:
        expression: Version-range expression.

    Returns:
        VersionConstraint for matching versions.

    Raises:
        InvalidConstraintError: If the expression cannot be parsed.
    """
    text = expression.strip()
    if not text:
        raise InvalidConstraintError(expression, "empty expression")

    alternatives = []
    for group in text.split("||"):
        group = group.strip()
        if not group:
            raise InvalidConstraintError(expression, "empty alternative")
        try:
            alternatives.append(tuple(_translate_group(group)))
        except ValueError as e:
            raise InvalidConstraintError(expression, str(e)) from e

    return VersionConstraint(expression=expression, alternatives=tuple(alternatives))


def _translate_group(group: str) -> list[Comparator]:
    """Translate one conjunction group into comparators."""
    hyphen = _HYPHEN_RANGE_RE.match(group)
    if hyphen:
        return _translate_term(">=", hyphen["lower"]) + _translate_term("<=", hyphen["upper"])

    comparators: list[Comparator] = []
    pos = 0
    while pos < len(group):
        match = _TERM_RE.match(group, pos)
        if match is None:
            raise ValueError(f"unexpected input '{group[pos:]}'")
        comparators.extend(_translate_term(match["op"] or "", match["version"]))
        pos = match.end()
    return comparators


def _translate_term(op: str, text: str) -> list[Comparator]:
    """Translate a single ``<op><version>`` term."""
    parts, prerelease, build = _split_version(text)
    given = _count_given(parts, text)
    if given < len(parts) and (prerelease or build):
        raise ValueError(f"wildcard version '{text}' cannot carry a pre-release or build")

    if given == 0:
        # "*", "x.x", ... match any version
        if op not in _ANY_OPERATORS:
            raise ValueError(f"operator '{op}' cannot be used with a wildcard")
        return []

    numbers = [int(part) for part in parts[:given]]
    lower = _make_version(numbers, prerelease, build)
    if op == "^":
        return [Comparator(">=", lower), Comparator("<", _caret_upper(numbers))]
    if op in ("~", "~>"):
        return [Comparator(">=", lower), Comparator("<", _tilde_upper(numbers))]

    if given == 3 or prerelease:
        if op in ("", "="):
            op = "=="
        return [Comparator(op, lower)]

    # Partial versions are x-ranges: "1.2" is [1.2.0, 1.3.0)
    upper = _make_version(numbers[:-1] + [numbers[-1] + 1])
    if op in ("", "=", "=="):
        return [Comparator(">=", lower), Comparator("<", upper)]
    if op == "!=":
        return [Comparator("!=", lower, upper=upper)]
    if op == ">=":
        return [Comparator(">=", lower)]
    if op == ">":
        return [Comparator(">=", upper)]
    if op == "<":
        return [Comparator("<", lower)]
    # "<="
    return [Comparator("<", upper)]


def _count_given(parts: list[str], text: str) -> int:
    """Count the numeric components before the first wildcard."""
    for index, part in enumerate(parts):
        if part in WILDCARDS:
            if any(p not in WILDCARDS for p in parts[index:]):
                raise ValueError(f"wildcard must be trailing in '{text}'")
            return index
    return len(parts)


def _caret_upper(numbers: list[int]) -> Version:
    """Upper bound for "^": the left-most non-zero component may not change."""
    given = len(numbers)
    major, minor, patch = (numbers + [0, 0])[:3]
    if major > 0 or given == 1:
        return _make_version([major + 1])
    if minor > 0 or given == 2:
        return _make_version([0, minor + 1])
    return _make_version([0, 0, patch + 1])


def _tilde_upper(numbers: list[int]) -> Version:
    """Upper bound for "~": patch-level changes, or minor when only major is given."""
    major, minor = (numbers + [0])[:2]
    if len(numbers) == 1:
        return _make_version([major + 1])
    return _make_version([major, minor + 1])


def sort_versions(
    items: Iterable[T],
    key: Optional[Callable[[T], Version]] = None,
) -> list[T]:
    """Sort items ascending by semantic-version precedence.

    Pre-release identifiers compare numerically when they are numbers and
    lexically otherwise; build metadata does not affect the order.

    Args:
        items: Versions, or arbitrary items when ``key`` is given.
        key: Returns the Version of an item.

    Returns:
        New sorted list.
    """
    version_of = key or (lambda item: item)
    return sorted(items, key=lambda item: version_of(item).precedence_key)
