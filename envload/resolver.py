"""Interpolation of ``$NAME`` and ``${NAME}`` references.

A value is a reference only when the whole value starts with ``$``;
references embedded in a longer string are left alone. Resolution is a
single pass over a snapshot of the known variables, so a reference that
points at another reference receives that reference's raw text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping

from .models import ParseResult
from .parser import REFERENCE_PREFIX

logger = logging.getLogger(__name__)


def reference_name(value: str) -> str:
    """Return the variable name referenced by *value*.

    ``$NAME`` gives ``NAME``; ``${NAME}`` gives ``NAME``. An opening brace
    without a closing one is kept as part of the name.
    """
    name = value[len(REFERENCE_PREFIX):]
    if name.startswith("{") and value.endswith("}"):
        return name[1:-1]
    return name


def build_lookup(
    items: Mapping[str, str],
    ambient: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Combine the ambient environment with the current items.

    Items win over ambient variables of the same name.
    """
    lookup: dict[str, str] = dict(ambient) if ambient else {}
    lookup.update(items)
    return lookup


class InterpolationResolver:
    """Resolves every reference among the known variables."""

    def resolve(
        self,
        result: ParseResult,
        items: MutableMapping[str, str],
        ambient: Mapping[str, str] | None = None,
    ) -> int:
        """Resolve the references of the combined lookup into *items*.

        Every variable whose value starts with ``$``, whether it came from
        this pass, an earlier one or the ambient environment, is rewritten.

        Args:
            result: Output of the line parser for this pass
            items: Mapping that already holds the entries of this pass
            ambient: Process environment to fall back on, or None when
                *items* was already seeded with it

        Returns:
            Number of values that were rewritten
        """
        if not result.needs_interpolation:
            return 0

        lookup = build_lookup(items, ambient)
        resolved = 0

        for key, value in lookup.items():
            if not value.startswith(REFERENCE_PREFIX):
                continue

            name = reference_name(value)
            new_value = lookup.get(name, "") if name else ""
            if name not in lookup:
                logger.debug("Unresolved reference %s for key %s", value, key)

            items[key] = new_value
            resolved += 1

        logger.debug("Resolved %d references", resolved)
        return resolved
