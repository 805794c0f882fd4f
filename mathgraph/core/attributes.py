from __future__ import annotations

from typing import Any, Union

import numpy as np

AttributeValue = Union[str, int, float, bool]


def _coerce_value(name: str, value: Any) -> AttributeValue | None:
    """INTERNAL: Validate an attribute value against the closed variant.

    Notes
    -----
    - numpy scalars (``np.float64(1.5)``, ``np.bool_(True)``...) are unwrapped with ``.item()``.
    - ``None`` is accepted and stored as-is; it reads back as "absent" for defaults.

    """
    if isinstance(value, np.generic):
        value = value.item()
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    raise TypeError(
        f"attribute {name!r} must be str, int, float or bool, got {type(value).__name__}"
    )


class Attributes:
    """Key -> value attribute bag shared by vertices, edges and graphs.

    Keys are strings; values are restricted to ``str``, ``int``, ``float`` and ``bool``.
    The conventional keys ``name``, ``weight``, ``group`` and ``balance`` carry meaning
    only for the algorithms that read them.

    """

    def _init_attributes(self, attributes=None):
        self._attributes = {}
        if attributes:
            self.set_attributes(attributes)

    def _attributes_changed(self):
        """Hook called after every write; entities use it to bump their graph version."""

    def get_attribute(self, name: str, default=None):
        """Return attribute ``name`` or ``default`` when it is not set."""
        value = self._attributes.get(name)
        return default if value is None else value

    def set_attribute(self, name: str, value) -> None:
        if not isinstance(name, str):
            raise TypeError(f"attribute name must be str, got {type(name).__name__}")
        self._attributes[name] = _coerce_value(name, value)
        self._attributes_changed()

    def set_attributes(self, attributes) -> None:
        """Set several attributes at once from a mapping."""
        for name, value in dict(attributes).items():
            if not isinstance(name, str):
                raise TypeError(f"attribute name must be str, got {type(name).__name__}")
            self._attributes[name] = _coerce_value(name, value)
        self._attributes_changed()

    def remove_attribute(self, name: str) -> None:
        if name in self._attributes:
            del self._attributes[name]
            self._attributes_changed()

    def get_attributes(self) -> dict:
        return dict(self._attributes)

    def get_attributes_with_prefix(self, prefix: str) -> dict:
        """Return every attribute whose key starts with ``prefix``.

        Parameters
        ----------
        prefix : str
            Key prefix, e.g. ``"graphviz."``.

        Returns
        -------
        dict
            ``{suffix: value}`` with the prefix stripped from each key.

        """
        n = len(prefix)
        return {k[n:]: v for k, v in self._attributes.items() if k.startswith(prefix)}
