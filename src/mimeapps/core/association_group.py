"""
Association groups

A group maps MIME types to a semicolon separated list of desktop ids, e.g.

    text/plain=geany.desktop;kde4-kwrite.desktop;

The raw strings are stored as read, lists are split on every access.
"""
import logging
from typing import Dict, Iterable, Iterator, List, Optional

from mimeapps.core.errors import InvalidMimeTypeError
from mimeapps.core.mime_type import is_valid_mime_type

logger = logging.getLogger(__name__)

SEPARATOR = ';'


class AssociationGroup:
    """Named group of MIME type to desktop id list entries"""

    def __init__(self, name: str, entries: Optional[Dict[str, str]] = None):
        self.name = name
        self._entries: Dict[str, str] = dict(entries) if entries else {}

    @staticmethod
    def split_apps(value: str) -> List[str]:
        """Split a list of desktop ids, dropping empty items"""
        return [desktop_id for desktop_id in value.split(SEPARATOR) if desktop_id]

    @staticmethod
    def join_apps(desktop_ids: Iterable[str], trailing: bool = True) -> str:
        """Join desktop ids into the stored form.

        Empty ids are dropped. An empty list joins to ''.
        """
        joined = SEPARATOR.join(desktop_id for desktop_id in desktop_ids if desktop_id)
        if joined and trailing:
            joined += SEPARATOR
        return joined

    def validate(self, file_name: Optional[str] = None) -> None:
        """Raise InvalidMimeTypeError for the first key that is not a MIME type"""
        for key, value in self._entries.items():
            if not is_valid_mime_type(key):
                raise InvalidMimeTypeError(self.name, key, value, file_name=file_name)

    def value(self, mime_type: str) -> Optional[str]:
        """Raw stored value for a key, or None"""
        return self._entries.get(mime_type)

    def entries(self) -> Dict[str, str]:
        """Copy of all raw entries, including ones with invalid keys"""
        return dict(self._entries)

    def mime_types(self) -> Iterator[str]:
        """Iterate valid MIME type keys in file order"""
        return (key for key in self._entries if is_valid_mime_type(key))

    def list_applications(self, mime_type: str) -> List[str]:
        """List desktop ids associated with mime_type in preference order"""
        if not is_valid_mime_type(mime_type):
            return []
        return self.split_apps(self._entries.get(mime_type, ''))

    def set_associations(self, mime_type: str, desktop_ids: Iterable[str]) -> None:
        """Replace the list for mime_type. An empty list removes the key."""
        if not is_valid_mime_type(mime_type):
            raise InvalidMimeTypeError(self.name, mime_type)

        joined = self.join_apps(desktop_ids)
        if joined:
            self._entries[mime_type] = joined
        else:
            self._entries.pop(mime_type, None)

    def delete_association(self, mime_type: str, desktop_id: str) -> None:
        """Remove desktop_id from the list for mime_type if it is there"""
        raw = self._entries.get(mime_type)
        if raw is None:
            return
        desktop_ids = self.split_apps(raw)
        if desktop_id not in desktop_ids:
            return

        remaining = [item for item in desktop_ids if item != desktop_id]
        if remaining:
            self._entries[mime_type] = self.join_apps(remaining, trailing=raw.endswith(SEPARATOR))
        else:
            del self._entries[mime_type]
        logger.debug("[%s] %s: removed %s", self.name, mime_type, desktop_id)

    def __contains__(self, mime_type) -> bool:
        return mime_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f"AssociationGroup(name={self.name!r}, entries={len(self._entries)})"
