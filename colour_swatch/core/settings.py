"""INI settings access for swatch description files.

Thin wrapper over configparser exposing groups, keys, scalar and list
values. List values are comma separated; an item may be double-quoted to
carry a literal comma. A repeated key keeps its last value. A file that
configparser cannot read is reported as an invalid-value SwatchError.
"""

import configparser
import csv

from colour_swatch.core.errors import ErrorKind, SwatchError


class SettingsFile:
    """Read-only view of one INI settings file."""

    def __init__(self, path: str):
        self.path = path
        self._parser = configparser.ConfigParser(interpolation=None, inline_comment_prefixes=(';',), strict=False)
        try:
            with open(path, encoding='utf-8') as f:
                self._parser.read_file(f, source=path)
        except (configparser.Error, UnicodeDecodeError) as e:
            raise SwatchError(ErrorKind.INVALID_VALUE, path=path, detail=str(e)) from e

    def groups(self) -> list[str]:
        return self._parser.sections()

    def has_group(self, group: str) -> bool:
        return self._parser.has_section(group)

    def has_key(self, group: str, key: str) -> bool:
        return self._parser.has_option(group, key)

    def value(self, group: str, key: str) -> str | None:
        """Return the raw value, or None when the group or key is absent."""
        if not self.has_key(group, key):
            return None
        return self._parser.get(group, key).strip()

    def list_value(self, group: str, key: str) -> list[str] | None:
        raw = self.value(group, key)
        if raw is None:
            return None
        return split_list(raw)


def split_list(raw: str) -> list[str]:
    """Split a comma separated value into stripped items, honouring quotes."""
    if not raw.strip():
        return []
    row = next(csv.reader([raw], skipinitialspace=True))
    return [item.strip() for item in row]
