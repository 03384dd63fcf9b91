"""
mimeapps.list files

Each file may hold three association groups:

[Default Applications]
    preferred application(s) for a MIME type
[Added Associations]
    extra applications able to open a MIME type, in preference order
[Removed Associations]
    applications that must not be offered for a MIME type

See https://specifications.freedesktop.org/mime-apps-spec/latest/
"""
import logging
import os
from typing import Iterable, List, Optional

from mimeapps.core.association_file import AssociationFile
from mimeapps.core.association_group import AssociationGroup
from mimeapps.core.errors import AssociationParseError, InvalidMimeTypeError
from mimeapps.core.mime_type import is_valid_mime_type
from mimeapps.utils.paths import mime_apps_list_paths

logger = logging.getLogger(__name__)

DEFAULT_APPLICATIONS = 'Default Applications'
ADDED_ASSOCIATIONS = 'Added Associations'
REMOVED_ASSOCIATIONS = 'Removed Associations'


class MimeAppsListFile(AssociationFile):
    """A single mimeapps.list file.

    A new, empty file has no groups; mutating operations create the groups
    they need. Nothing is written to disk until save() is called.
    """

    KNOWN_GROUPS = (DEFAULT_APPLICATIONS, ADDED_ASSOCIATIONS, REMOVED_ASSOCIATIONS)

    def default_applications(self) -> Optional[AssociationGroup]:
        return self._association_group(DEFAULT_APPLICATIONS)

    def added_associations(self) -> Optional[AssociationGroup]:
        return self._association_group(ADDED_ASSOCIATIONS)

    def removed_associations(self) -> Optional[AssociationGroup]:
        return self._association_group(REMOVED_ASSOCIATIONS)

    def ensure_default_applications(self) -> AssociationGroup:
        return self._ensure_group(DEFAULT_APPLICATIONS)

    def ensure_added_associations(self) -> AssociationGroup:
        return self._ensure_group(ADDED_ASSOCIATIONS)

    def ensure_removed_associations(self) -> AssociationGroup:
        return self._ensure_group(REMOVED_ASSOCIATIONS)

    @staticmethod
    def _check_mime_type(group_name: str, mime_type: str) -> None:
        if not is_valid_mime_type(mime_type):
            raise InvalidMimeTypeError(group_name, mime_type)

    def set_default_application(self, mime_type: str, desktop_id: str) -> None:
        """Make desktop_id the default and most preferred application for mime_type.

        The id is also moved to the front of Added Associations and dropped
        from Removed Associations.
        """
        if not mime_type or not desktop_id:
            return

        self._check_mime_type(DEFAULT_APPLICATIONS, mime_type)
        self.ensure_default_applications().set_associations(mime_type, [desktop_id])

        added = self.ensure_added_associations()
        others = [item for item in added.list_applications(mime_type) if item != desktop_id]
        added.set_associations(mime_type, [desktop_id] + others)

        removed = self.removed_associations()
        if removed is not None:
            removed.delete_association(mime_type, desktop_id)

    def add_association(self, mime_type: str, desktop_id: str) -> None:
        """Append desktop_id to Added Associations and drop it from Removed Associations"""
        if not mime_type or not desktop_id:
            return

        self._check_mime_type(ADDED_ASSOCIATIONS, mime_type)
        added = self.ensure_added_associations()
        desktop_ids = added.list_applications(mime_type)
        if desktop_id not in desktop_ids:
            added.set_associations(mime_type, desktop_ids + [desktop_id])

        removed = self.removed_associations()
        if removed is not None:
            removed.delete_association(mime_type, desktop_id)

    def remove_association(self, mime_type: str, desktop_id: str) -> None:
        """Record desktop_id in Removed Associations.

        The id is also dropped from Added Associations and Default Applications.
        """
        if not mime_type or not desktop_id:
            return

        self._check_mime_type(REMOVED_ASSOCIATIONS, mime_type)
        removed = self.ensure_removed_associations()
        desktop_ids = removed.list_applications(mime_type)
        if desktop_id not in desktop_ids:
            removed.set_associations(mime_type, desktop_ids + [desktop_id])

        added = self.added_associations()
        if added is not None:
            added.delete_association(mime_type, desktop_id)
        defaults = self.default_applications()
        if defaults is not None:
            defaults.delete_association(mime_type, desktop_id)

    def set_added_associations(self, mime_type: str, desktop_ids: Iterable[str]) -> None:
        """Overwrite the Added Associations list for mime_type.

        Removed Associations and Default Applications are left as they are.
        """
        if not mime_type:
            return
        self._check_mime_type(ADDED_ASSOCIATIONS, mime_type)
        self.ensure_added_associations().set_associations(mime_type, desktop_ids)


def mime_apps_list_files(paths: Optional[Iterable[str]] = None,
                         strict: bool = True) -> List[MimeAppsListFile]:
    """Read mimeapps.list files from paths, in the given order.

    Files that don't exist or can't be read are left out of the result.
    When paths is None the standard XDG locations are used.
    """
    if paths is None:
        paths = mime_apps_list_paths()

    files = []
    for path in paths:
        if not os.path.isfile(path):
            continue
        try:
            files.append(MimeAppsListFile(path, strict=strict))
        except (OSError, AssociationParseError) as e:
            logger.debug("Skipping %s: %s", path, e)
    return files
