"""
Label table: the words the help renderer prints that are not user data.

Every fixed word of the help output ("Usage", "OPTIONS", "REQUIRED", the
"Positionals" header, ...) is looked up here by a stable key, so a host can
translate or restyle the output without touching layout code.

Resolution order (later wins)
1. the built-in defaults (each key maps to itself);
2. a ``__labels__`` mapping defined in ``__main__`` by the host program;
3. the overrides given to the table (constructor or :meth:`LabelTable.label`).

Unknown keys resolve to themselves, which is how option type names such as
``TEXT`` or ``INT`` pass through the table unchanged unless overridden.
"""
from collections.abc import Mapping

_DEFAULTS = {
    "Usage": "Usage",
    "OPTIONS": "OPTIONS",
    "REQUIRED": "REQUIRED",
    "Needs": "Needs",
    "Excludes": "Excludes",
    "Env": "Env",
    "Positionals": "Positionals",
    "SUBCOMMAND": "SUBCOMMAND",
    "SUBCOMMANDS": "SUBCOMMANDS",
}


class LabelTable(Mapping):
    """
    Mapping of label keys to display strings.

    >>> labels = LabelTable({"Usage": "Uso"})
    >>> labels.get_label("Usage"), labels.get_label("TEXT")
    ('Uso', 'TEXT')
    """

    def __init__(self, labels=(), /):
        self._labels = dict(labels)

    def _resolve(self):
        host = getattr(__import__("__main__"), "__labels__", {})
        if not isinstance(host, Mapping):
            raise TypeError("'__labels__' must be a mapping")
        return _DEFAULTS | dict(host) | self._labels

    def __getitem__(self, key):
        return self._resolve()[key]

    def __iter__(self):
        return iter(self._resolve())

    def __len__(self):
        return len(self._resolve())

    def label(self, key, value, /):
        """
        Override the display string of a key.
        """
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("label() arguments must be strings")
        self._labels[key] = value

    def get_label(self, key, /):
        """
        Return the display string for key, or key itself when it has none.
        """
        return self._resolve().get(key, key)

    def __repr__(self):
        return f"label-table({self._labels!r})"


__all__ = (
    "LabelTable",
)
