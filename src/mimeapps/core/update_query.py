"""
Batched edits of mimeapps.list files
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from mimeapps.core.association_group import AssociationGroup
from mimeapps.core.mimeapps_list import MimeAppsListFile
from mimeapps.utils.paths import XdgPaths

logger = logging.getLogger(__name__)

ADD = 'add'
REMOVE = 'remove'
SET_DEFAULT = 'set-default'
SET_ADDED = 'set-added'


@dataclass(frozen=True)
class Operation:
    mime_type: str
    value: str  # desktop id, or a joined list for set-added
    kind: str  # add, remove, set-default, set-added


class AssociationUpdateQuery:
    """Ordered list of changes that can be applied to any MimeAppsListFile.

    Example:
        query = AssociationUpdateQuery()
        query.remove_association('text/plain', 'kwrite.desktop')
        query.set_default_application('text/plain', 'geany.desktop')
        update_associations('~/.config/mimeapps.list', query)
    """

    def __init__(self):
        self._operations: List[Operation] = []

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return tuple(self._operations)

    def add_association(self, mime_type: str, desktop_id: str) -> 'AssociationUpdateQuery':
        self._operations.append(Operation(mime_type, desktop_id, ADD))
        return self

    def remove_association(self, mime_type: str, desktop_id: str) -> 'AssociationUpdateQuery':
        self._operations.append(Operation(mime_type, desktop_id, REMOVE))
        return self

    def set_default_application(self, mime_type: str, desktop_id: str) -> 'AssociationUpdateQuery':
        self._operations.append(Operation(mime_type, desktop_id, SET_DEFAULT))
        return self

    def set_added_associations(self, mime_type: str, desktop_ids: Iterable[str]) -> 'AssociationUpdateQuery':
        joined = AssociationGroup.join_apps(desktop_ids)
        self._operations.append(Operation(mime_type, joined, SET_ADDED))
        return self

    def apply(self, mime_apps_list: MimeAppsListFile) -> None:
        """Apply the operations to mime_apps_list in the order they were recorded"""
        for op in self._operations:
            if op.kind == ADD:
                mime_apps_list.add_association(op.mime_type, op.value)
            elif op.kind == REMOVE:
                mime_apps_list.remove_association(op.mime_type, op.value)
            elif op.kind == SET_DEFAULT:
                mime_apps_list.set_default_application(op.mime_type, op.value)
            elif op.kind == SET_ADDED:
                mime_apps_list.set_added_associations(op.mime_type, AssociationGroup.split_apps(op.value))
            else:
                raise ValueError(f"Unknown operation: {op.kind}")

    def __len__(self) -> int:
        return len(self._operations)

    def __bool__(self) -> bool:
        return bool(self._operations)


def update_associations(file_name: str, query: AssociationUpdateQuery) -> MimeAppsListFile:
    """Apply query to the mimeapps.list at file_name and write it back.

    A missing file is created. Keys that are not MIME types are kept as they
    are, but a file that is not valid INI-like syntax is not touched.

    Raises:
        AssociationParseError: If the existing file can't be parsed
        OSError: If the file can't be read or written
    """
    path = Path(file_name).expanduser()
    if path.exists():
        mime_apps_list = MimeAppsListFile(str(path), strict=False, skip_malformed=False)
    else:
        mime_apps_list = MimeAppsListFile()

    query.apply(mime_apps_list)

    path.parent.mkdir(parents=True, exist_ok=True)
    mime_apps_list.save(str(path))
    logger.info("Applied %d association change(s) to %s", len(query), path)
    return mime_apps_list


def update_user_associations(query: AssociationUpdateQuery,
                             paths: Optional[XdgPaths] = None) -> MimeAppsListFile:
    """Apply query to the current user's mimeapps.list"""
    if paths is None:
        paths = XdgPaths.from_environ()
    return update_associations(paths.writable_mime_apps_list_path(), query)
