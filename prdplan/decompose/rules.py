"""
Keyword rule tables.

Classification (priority, project type) and risk detection are ordered
lists of (predicate, result) pairs. Priority and project type take the
first match; risks collect every match.
"""

from typing import Callable, Iterable, TypeVar

T = TypeVar("T")

Predicate = Callable[[str], bool]
Rule = tuple[Predicate, T]


def contains_any(*needles: str) -> Predicate:
    """Predicate: case-insensitive substring match on any needle."""
    lowered = tuple(n.lower() for n in needles)

    def predicate(text: str) -> bool:
        haystack = text.lower()
        return any(n in haystack for n in lowered)

    return predicate


def first_match(rules: Iterable[Rule], subject, default: T) -> T:
    """Return the result of the first rule whose predicate accepts subject."""
    for predicate, result in rules:
        if predicate(subject):
            return result
    return default


def all_matches(rules: Iterable[Rule], subject) -> list:
    """Return results of every rule whose predicate accepts subject, in rule order."""
    return [result for predicate, result in rules if predicate(subject)]


PRIORITY_RULES: list[Rule] = [
    (contains_any("must", "critical", "essential"), "critical"),
    (contains_any("should", "important", "high priority"), "high"),
    (contains_any("could", "nice to have", "low priority"), "low"),
]
DEFAULT_PRIORITY = "medium"

# Order matters: mobile beats api, api beats web
PROJECT_TYPE_RULES: list[Rule] = [
    (contains_any("mobile", "ios", "android"), "mobile-app"),
    (contains_any("api", "microservice", "backend only"), "api-service"),
    (contains_any("web", "dashboard", "portal"), "web-app"),
]
