"""
mimeinfo.cache files

Generated by update-desktop-database from the MimeType keys of installed
.desktop files. Read-only here.
"""
import logging
import os
from typing import Iterable, Iterator, List, Optional

from mimeapps.core.association_file import AssociationFile
from mimeapps.core.association_group import AssociationGroup
from mimeapps.core.errors import AssociationParseError
from mimeapps.utils.paths import mime_info_cache_paths

logger = logging.getLogger(__name__)

MIME_CACHE = 'MIME Cache'


class MimeInfoCacheFile(AssociationFile):
    """A single mimeinfo.cache file. Reading fails if it has no MIME Cache group."""

    KNOWN_GROUPS = (MIME_CACHE,)

    def _init_empty(self) -> None:
        self._groups[MIME_CACHE] = AssociationGroup(MIME_CACHE)

    def _check_required_groups(self) -> None:
        if self._association_group(MIME_CACHE) is None:
            raise AssociationParseError('No "MIME Cache" group', 0, self.file_name)

    def mime_cache(self) -> AssociationGroup:
        return self._groups[MIME_CACHE]

    def list_applications(self, mime_type: str) -> List[str]:
        return self.mime_cache().list_applications(mime_type)

    def mime_types(self) -> Iterator[str]:
        return self.mime_cache().mime_types()


def mime_info_cache_files(paths: Optional[Iterable[str]] = None,
                          strict: bool = True) -> List[MimeInfoCacheFile]:
    """Read mimeinfo.cache files from paths, skipping the ones that fail.

    When paths is None the standard XDG locations are used.
    """
    if paths is None:
        paths = mime_info_cache_paths()

    files = []
    for path in paths:
        if not os.path.isfile(path):
            continue
        try:
            files.append(MimeInfoCacheFile(path, strict=strict))
        except (OSError, AssociationParseError) as e:
            logger.debug("Skipping %s: %s", path, e)
    return files
