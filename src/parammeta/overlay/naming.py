"""Field-name sanitization shared by document authors and the loader.

Overlay documents file each field entry under an element whose tag is
the field's internal name with every character outside ``[A-Za-z0-9_]``
removed.  Tags may not start with a digit, so such names get a leading
underscore.  Several internal names can collapse onto the same key; the
loader then pairs fields and entries by occurrence, in schema order.
"""
from __future__ import annotations

import re

_UNSAFE = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_field_name(internal_name: str) -> str:
    """Return the document key for ``internal_name``.

    >>> sanitize_field_name("1flag")
    '_1flag'
    >>> sanitize_field_name("dmy:pad[2]")
    'dmypad2'
    """
    name = _UNSAFE.sub("", internal_name)
    if name[:1].isdigit():
        name = "_" + name
    return name
