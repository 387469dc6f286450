"""Named value-to-label tables declared in an overlay document.

::

    <Enums>
      <Enum Name="SP_EFFECT_TYPE">
        <Option Value="0" Name="None"/>
        <Option Value="1" Name="Poison"/>
      </Enum>
    </Enums>
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from parammeta.overlay.errors import MalformedDocumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class EnumTable:
    """A read-only mapping from a stored raw value (as text) to a label.

    Parameters
    ----------
    name:
        The name fields use to refer to this table.
    values:
        Raw value text mapped to its human-readable label.
    duplicate_values:
        Raw values that were declared more than once; the last
        declaration won.
    """

    name: str
    values: Mapping[str, str] = field(default_factory=dict)
    duplicate_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @classmethod
    def from_element(cls, element: ET.Element) -> "EnumTable":
        """Build a table from one ``<Enum>`` element.

        Raises
        ------
        MalformedDocumentError
            If the enum has no ``Name`` or an option lacks ``Value`` or ``Name``.
        """
        name = element.get("Name")
        if name is None:
            raise MalformedDocumentError("<Enum> element is missing its 'Name' attribute")
        values: dict[str, str] = {}
        duplicates: list[str] = []
        for position, option in enumerate(element.findall("Option")):
            raw = option.get("Value")
            label = option.get("Name")
            if raw is None or label is None:
                missing = "Value" if raw is None else "Name"
                raise MalformedDocumentError(
                    f"Option #{position} of enum {name!r} is missing its {missing!r} attribute"
                )
            if raw in values:
                duplicates.append(raw)
            values[raw] = label
        logger.debug("Parsed enum %r with %d option(s)", name, len(values))
        return cls(name=name, values=values, duplicate_values=tuple(duplicates))

    def label_for(self, raw: object) -> str | None:
        """Return the label for ``raw``, compared as text, or ``None``."""
        return self.values.get(str(raw))

    def __contains__(self, raw: object) -> bool:
        return str(raw) in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)
