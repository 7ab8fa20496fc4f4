"""Field-by-field merge of typed patch objects.

A patch field left as None is unchanged. ``CLEARED`` asks for the field to
be set to None.
"""

from dataclasses import fields, replace
from typing import Any, TypeVar

T = TypeVar("T")


class _Cleared:
    """Marker for a patch field that must become None."""

    def __repr__(self) -> str:
        return "CLEARED"


CLEARED: Any = _Cleared()


def or_cleared(value):
    """Return ``value``, or ``CLEARED`` when it is None."""
    return CLEARED if value is None else value


def patch_changes(patch) -> dict[str, Any]:
    """Return the fields explicitly set on a patch.

    Args:
        patch: Patch dataclass whose unset fields are None.

    Returns:
        dict[str, Any]: Field name to new value, in declaration order.
        Cleared fields map to None.
    """
    changes: dict[str, Any] = {}
    for item in fields(patch):
        value = getattr(patch, item.name)
        if value is CLEARED:
            changes[item.name] = None
        elif value is not None:
            changes[item.name] = value
    return changes


def apply_patch(entity: T, patch) -> T:
    """Return a copy of ``entity`` with every set patch field applied."""
    changes = patch_changes(patch)
    if not changes:
        return entity
    return replace(entity, **changes)


def revert_patch(entity: T, patch):
    """Build a patch restoring the fields ``patch`` would overwrite."""
    previous = {
        name: or_cleared(getattr(entity, name))
        for name in patch_changes(patch)
    }
    return type(patch)(**previous)


__all__ = [
    "CLEARED",
    "or_cleared",
    "patch_changes",
    "apply_patch",
    "revert_patch",
]
