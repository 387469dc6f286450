"""parammeta: merge human-authored field metadata onto loaded param schemas.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import parammeta
    from parammeta.schema import ParamDef, ParamField

    weapon_def = ParamDef("EquipParamWeapon", [ParamField("id"), ParamField("1flag")])
    registry = parammeta.OverlayRegistry()

    # Never raises for a missing or broken document
    overlay = parammeta.load("meta/EquipParamWeapon.xml", weapon_def, registry)

    registry.field_overlay(weapon_def.fields[1]).is_bool
    [str(d) for d in overlay.diagnostics]

    parammeta.__version__
    '0.1.0'
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING

from parammeta.registry import OverlayRegistry

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from parammeta.overlay.schema import SchemaOverlay
    from parammeta.schema.nodes import Schema


def load(
    path: str | os.PathLike[str],
    schema: "Schema",
    registry: OverlayRegistry,
    strict: bool = False,
) -> "SchemaOverlay":
    """Load the overlay document at ``path`` onto ``schema``.

    Parameters
    ----------
    path:
        Location of the overlay document.  It need not exist.
    schema:
        The loaded schema to annotate.
    registry:
        Registry the result is registered in.
    strict:
        When ``True``, warnings in ``SchemaOverlay.diagnostics`` are
        promoted to errors.

    Returns
    -------
    SchemaOverlay
        The merged overlay, all-blank if the document was missing or
        unusable.

    Raises
    ------
    parammeta.overlay.DuplicateRegistrationError
        If ``schema`` was already loaded into ``registry``.
    """
    from parammeta.overlay.loader import LoaderConfig, OverlayLoader

    return OverlayLoader(registry, LoaderConfig(strict=strict)).load(path, schema)


def load_bytes(
    data: bytes,
    schema: "Schema",
    registry: OverlayRegistry,
    strict: bool = False,
) -> "SchemaOverlay":
    """Merge an in-memory overlay document onto ``schema``.

    Behaves like ``load`` for everything after the file has been read.
    """
    from parammeta.overlay.loader import LoaderConfig, OverlayLoader

    return OverlayLoader(registry, LoaderConfig(strict=strict)).load_bytes(data, schema)


__all__ = [
    "__version__",
    "OverlayRegistry",
    "load",
    "load_bytes",
]
