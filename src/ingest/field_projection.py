"""Field selection clause for list item requests."""

from __future__ import annotations

from typing import Sequence

from core.constants import SELECT_ALL_FIELDS_CLAUSE
from core.types import FieldDescriptor


def project_fields(fields: Sequence[FieldDescriptor] | None) -> str:
    """Build the ``$expand`` clause selecting the declared fields.

    Args:
        fields: Declared field descriptors, in order.

    Returns:
        ``fields($select=A,B)``, or ``fields`` to select every field
        when nothing is declared.
    """
    names = [descriptor.name for descriptor in fields or ()]
    if not names:
        return SELECT_ALL_FIELDS_CLAUSE
    return f"{SELECT_ALL_FIELDS_CLAUSE}($select={','.join(names)})"
