#!/usr/bin/env python3
"""Example: Degraded loads and diagnostics

Demonstrates that a stale or broken overlay document never blocks the
host: affected fields fall back to blank metadata, and every loss is
reported as a diagnostic.

Usage:
    python examples/02_diagnostics.py

Requirements:
    pip install parammeta
"""
from __future__ import annotations

import parammeta
from parammeta.schema import ParamDef, ParamField

STALE_DOCUMENT = b'''
<PARAMMETA XmlVersion="0">
  <Field>
    <id AltName="Row ID"/>
    <dmypad Refs=","/>
    <removedField AltName="Gone"/>
    <id Enum="NOT_DECLARED"/>
  </Field>
</PARAMMETA>
'''

OUTDATED_DOCUMENT = b'<PARAMMETA XmlVersion="3"/>'


def _schema(name: str) -> ParamDef:
    return ParamDef(name, [ParamField("id"), ParamField("dmy:pad"), ParamField("id")])


def main() -> None:
    registry = parammeta.OverlayRegistry()

    print("Stale document (per-field degradation):")
    overlay = parammeta.load_bytes(STALE_DOCUMENT, _schema("Stale"), registry)
    for diagnostic in overlay.diagnostics:
        print(f"  {diagnostic}")

    print("\nOutdated document (whole document ignored):")
    overlay = parammeta.load_bytes(OUTDATED_DOCUMENT, _schema("Outdated"), registry)
    for diagnostic in overlay.diagnostics:
        print(f"  {diagnostic}")
    print(f"  all blank: {all(fo.is_blank for fo in overlay.field_overlays)}")

    print("\nStrict mode promotes warnings to errors:")
    overlay = parammeta.load_bytes(STALE_DOCUMENT, _schema("Strict"), registry, strict=True)
    print(f"  has errors: {overlay.has_errors}")


if __name__ == "__main__":
    main()
