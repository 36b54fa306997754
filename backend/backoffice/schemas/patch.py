# backoffice/schemas/patch.py
"""
Partial-update ("patch") support shared by the user and blog controllers.

Merge rule: a field that is present and non-null in the patch overrides the
stored value; absent or null fields leave the stored value untouched.
"""
from typing import Any, Iterable

from pydantic import BaseModel


def patch_values(patch: BaseModel, exclude: Iterable[str] = ()) -> dict[str, Any]:
    """Return the overriding values of `patch`, keyed by model field name."""
    skipped = set(exclude)
    values = {}
    for name, value in patch.model_dump().items():
        if name in skipped or value is None:
            continue
        values[name] = value
    return values


def apply_patch(target: Any, patch: BaseModel, exclude: Iterable[str] = ()) -> list[str]:
    """
    Apply `patch` onto `target` in place.

    Returns:
        Names of the attributes that were assigned
    """
    values = patch_values(patch, exclude)
    for name, value in values.items():
        setattr(target, name, value)
    return list(values)
