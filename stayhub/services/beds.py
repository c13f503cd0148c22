"""Human-readable summary of an apartment's beds."""

from collections.abc import Iterable
from typing import Any

import inflect

_inflector = inflect.engine()


def pluralize(noun_phrase: str, count: int) -> str:
    """Pluralise the last word of ``noun_phrase`` unless ``count`` is 1."""
    if count == 1:
        return noun_phrase
    head, _, last = noun_phrase.rpartition(" ")
    plural = _inflector.plural_noun(last) or last
    return f"{head} {plural}" if head else plural


def format_beds_list(bed_type_names: Iterable[str]) -> str:
    """Summarise beds grouped by type, e.g. ``"5 beds (3 Single beds, 2 Large double beds)"``.

    Groups keep the order in which each type is first seen. No beds give an
    empty string; a single type gives ``"2 Single beds"``.
    """
    groups: dict[str, int] = {}
    for name in bed_type_names:
        groups[name] = groups.get(name, 0) + 1

    if not groups:
        return ""

    total = sum(groups.values())
    if len(groups) == 1:
        (name,) = groups
        return f"{total} {pluralize(name, total)}"

    parts = ", ".join(f"{count} {pluralize(name, count)}" for name, count in groups.items())
    return f"{total} {pluralize('bed', total)} ({parts})"


def apartment_bed_type_names(apartment: Any) -> list[str]:
    """Bed type names across all rooms, in room then bed order."""
    return [bed.bed_type.name for room in apartment.rooms for bed in room.beds]
