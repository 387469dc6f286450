#!/usr/bin/env python3
"""Example: Quickstart for parammeta

Minimal working example: describe a schema, merge an overlay document
onto it, and query the merged metadata by field.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install parammeta
"""
from __future__ import annotations

import parammeta
from parammeta.schema import ParamDef, ParamField

OVERLAY_DOCUMENT = rb'''<?xml version="1.0" encoding="utf-8"?>
<PARAMMETA XmlVersion="0">
  <Self OffsetSize="3"/>
  <Enums>
    <Enum Name="WEAPON_CATEGORY">
      <Option Value="0" Name="Dagger"/>
      <Option Value="1" Name="Straight Sword"/>
    </Enum>
  </Enums>
  <Field>
    <wepCategory Enum="WEAPON_CATEGORY" AltName="Category"/>
    <_1handOnly IsBool=""/>
    <originEquipWep Refs="EquipParamWeapon" Wiki="Base weapon.\nUsed for upgrades."/>
  </Field>
</PARAMMETA>
'''


def main() -> None:
    print(f"parammeta version: {parammeta.__version__}")

    weapon_def = ParamDef(
        "EquipParamWeapon",
        [
            ParamField("wepCategory", "u8"),
            ParamField("1handOnly", "u8"),
            ParamField("originEquipWep", "s32"),
        ],
    )

    # Step 1: Merge the document; the registry is owned by the caller
    registry = parammeta.OverlayRegistry()
    overlay = parammeta.load_bytes(OVERLAY_DOCUMENT, weapon_def, registry)
    print(f"Merged {len(overlay.field_overlays)} fields, offset size {overlay.offset_size}")

    # Step 2: Query per field
    for field in weapon_def.fields:
        meta = registry.field_overlay(field)
        print(f"  {field.internal_name:>16} -> {meta.display_name(field)}"
              f" bool={meta.is_bool} refs={meta.ref_types}")

    category = registry.field_overlay(weapon_def.fields[0])
    print(f"\nCategory 1 is {category.enum_label(1)!r}")


if __name__ == "__main__":
    main()
