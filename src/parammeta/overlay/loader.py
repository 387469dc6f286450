"""Top-level overlay loading.

``OverlayLoader.load`` is total with respect to document quality: a
missing, unreadable, malformed or outdated document yields an all-blank
``SchemaOverlay`` instead of an exception.  The one error it raises is
``DuplicateRegistrationError``, for loading the same schema twice into
one registry.

Usage
-----
::

    from parammeta.overlay.loader import OverlayLoader
    from parammeta.registry import OverlayRegistry

    registry = OverlayRegistry()
    loader = OverlayLoader(registry)
    overlay = loader.load("meta/NpcParam.xml", npc_def)
    for diagnostic in overlay.diagnostics:
        print(diagnostic)
"""
from __future__ import annotations

import dataclasses
import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from parammeta.diagnostics import DiagnosticCode, DiagnosticSeverity, LoadDiagnostic
from parammeta.overlay.errors import OverlayDocumentError
from parammeta.overlay.schema import SchemaOverlay
from parammeta.schema.nodes import Schema, schema_name

if TYPE_CHECKING:
    from parammeta.registry.registry import OverlayRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoaderConfig:
    """Options for ``OverlayLoader``.

    Parameters
    ----------
    strict:
        When ``True``, WARNING-level diagnostics are promoted to ERROR.
        The load itself still never fails on a bad document.
    report_unmatched:
        When ``False``, document entries that match no field are not
        reported.
    """

    strict: bool = False
    report_unmatched: bool = True


class OverlayLoader:
    """Loads overlay documents and registers the results.

    Parameters
    ----------
    registry:
        Where loaded overlays are registered.
    config:
        Loader options.  Defaults to ``LoaderConfig()``.
    """

    def __init__(self, registry: OverlayRegistry, config: LoaderConfig | None = None) -> None:
        self._registry = registry
        self._config = config if config is not None else LoaderConfig()

    @property
    def registry(self) -> OverlayRegistry:
        return self._registry

    @property
    def config(self) -> LoaderConfig:
        return self._config

    def load(self, path: str | os.PathLike[str], schema: Schema) -> SchemaOverlay:
        """Load the document at ``path`` onto ``schema`` and register the result.

        Raises
        ------
        DuplicateRegistrationError
            If ``schema`` or one of its fields is already registered.
        """
        self._registry.ensure_unregistered(schema)
        path = Path(path)
        if not path.is_file():
            logger.debug("No overlay document for %s at %s", schema_name(schema), path)
            overlay = SchemaOverlay.blank(
                schema,
                [
                    LoadDiagnostic(
                        severity=DiagnosticSeverity.INFORMATION,
                        code=DiagnosticCode.NO_DOCUMENT,
                        message=f"No overlay document at {path}",
                    )
                ],
            )
            return self._finish(overlay)
        try:
            data = path.read_bytes()
        except OSError as exc:
            return self._finish(self._rejected(schema, str(path), exc))
        return self._finish(self._merge(data, schema, str(path)))

    def load_bytes(self, data: bytes, schema: Schema) -> SchemaOverlay:
        """Merge an in-memory overlay document onto ``schema`` and register the result.

        Raises
        ------
        DuplicateRegistrationError
            If ``schema`` or one of its fields is already registered.
        """
        self._registry.ensure_unregistered(schema)
        return self._finish(self._merge(data, schema, "<bytes>"))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _merge(self, data: bytes, schema: Schema, source: str) -> SchemaOverlay:
        try:
            return SchemaOverlay.from_bytes(
                data, schema, report_unmatched=self._config.report_unmatched
            )
        except (ET.ParseError, OverlayDocumentError) as exc:
            return self._rejected(schema, source, exc)

    def _rejected(self, schema: Schema, source: str, exc: Exception) -> SchemaOverlay:
        logger.warning(
            "Ignoring overlay document %s for %s: %s", source, schema_name(schema), exc
        )
        return SchemaOverlay.blank(
            schema,
            [
                LoadDiagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    code=DiagnosticCode.DOCUMENT_REJECTED,
                    message=f"{source}: {exc}",
                )
            ],
        )

    def _finish(self, overlay: SchemaOverlay) -> SchemaOverlay:
        if self._config.strict:
            overlay = dataclasses.replace(
                overlay, diagnostics=tuple(d.promoted() for d in overlay.diagnostics)
            )
        self._registry.register(overlay)
        return overlay
