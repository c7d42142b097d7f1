"""Helpers for OMDb's string-typed record fields."""

from typing import Any, List, Optional, Sequence

# OMDb fills unknown fields with this literal instead of omitting them
NOT_AVAILABLE = "N/A"

# Director / Writer / Actors are lists joined with exactly this delimiter
PEOPLE_SEPARATOR = ", "


def is_valid_field(value: Optional[str]) -> bool:
    """
    Check whether an OMDb field carries real data.

    A field is invalid when it is missing or contains "n/a" in any case,
    which also catches composite values like "N/A (N/A)".
    """
    if value is None:
        return False
    return "n/a" not in value.lower()


def split_people(value: Optional[str]) -> List[str]:
    """
    Split a multi-person field into individual names, in the original order.

    Writer credits keep their role annotation, e.g.
    "Bob Kane (characters), David S. Goyer (story)".
    """
    if not is_valid_field(value):
        return []
    return [name for name in value.split(PEOPLE_SEPARATOR) if name]


def join_people(names: Sequence[str]) -> str:
    return PEOPLE_SEPARATOR.join(names)


def interleave(item: Any, values: Sequence[Any]) -> List[Any]:
    """
    Place ``item`` between every pair of ``values``.

    interleave(", ", ["a", "b", "c"]) -> ["a", ", ", "b", ", ", "c"]

    An empty sequence yields ``[item]``; display code relies on that to render
    a lone separator rather than nothing.
    """
    if not values:
        return [item]
    result = [values[0]]
    for value in values[1:]:
        result.append(item)
        result.append(value)
    return result
