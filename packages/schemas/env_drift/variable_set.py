"""VariableSet type shared by all envquack readers and comparisons.

A VariableSet maps a case-sensitive variable name to its literal value. An empty
string is a real value ("declared without a value") and is distinct from the
key being absent.
"""

from collections.abc import Iterable, Mapping

VariableSet = dict[str, str]


def sorted_keys(variables: Mapping[str, str]) -> list[str]:
    """Return the keys of a VariableSet in lexicographic order."""
    return sorted(variables)


def sorted_unique(values: Iterable[str]) -> list[str]:
    """Return values de-duplicated and sorted ascending."""
    return sorted(set(values))


__all__ = ["VariableSet", "sorted_keys", "sorted_unique"]
