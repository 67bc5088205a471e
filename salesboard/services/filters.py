# salesboard/services/filters.py

from typing import Iterable, List, Optional, Sequence


def _category(record):
    if isinstance(record, dict):
        return record.get("category")
    return getattr(record, "category", None)


def filter_by_categories(dataset: Sequence, selected: Iterable[str]) -> List:
    """
    Keep the records whose category is one of `selected`, in dataset order.

    An empty selection keeps nothing.
    """
    selected = set(selected)
    return [r for r in dataset if _category(r) in selected]


def categories_of(dataset: Sequence) -> List[Optional[str]]:
    """Distinct categories in first-seen order, None included when a record has none."""
    seen = []
    for r in dataset:
        c = _category(r)
        if c not in seen:
            seen.append(c)
    return seen
