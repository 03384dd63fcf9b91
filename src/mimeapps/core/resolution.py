"""
Finding applications associated with a MIME type

The algorithm follows the "Adding/removing associations" and "Default
Application" sections of the freedesktop.org mime-apps standard:

1. mimeapps.list files are consulted in order. Each file's Removed
   Associations extend the set of suppressed desktop ids, then its Added
   Associations contribute ids that are not suppressed yet.
2. mimeinfo.cache files follow as the lowest priority source.
3. The default application is the first usable id from the Default
   Applications groups, falling back to the first usable associated one.

Parent MIME types are not considered; callers retry with the parent type
themselves.
"""
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set

from mimeapps.core.desktop_provider import ApplicationProvider, DesktopApplication
from mimeapps.core.mimeapps_list import MimeAppsListFile
from mimeapps.core.mimeinfo_cache import MimeInfoCacheFile

logger = logging.getLogger(__name__)


def _iter_associated(mime_type: str,
                     mime_apps_lists: Iterable[Optional[MimeAppsListFile]],
                     mime_info_caches: Iterable[Optional[MimeInfoCacheFile]],
                     ignore_removed: bool = False) -> Iterator[str]:
    removed: Set[str] = set()
    seen: Set[str] = set()

    for mime_apps_list in mime_apps_lists:
        if mime_apps_list is None:
            continue
        removed_group = mime_apps_list.removed_associations()
        if removed_group is not None and not ignore_removed:
            removed.update(removed_group.list_applications(mime_type))
        added_group = mime_apps_list.added_associations()
        if added_group is None:
            continue
        for desktop_id in added_group.list_applications(mime_type):
            if desktop_id in removed or desktop_id in seen:
                continue
            seen.add(desktop_id)
            yield desktop_id

    for mime_info_cache in mime_info_caches:
        if mime_info_cache is None:
            continue
        for desktop_id in mime_info_cache.list_applications(mime_type):
            if desktop_id in removed or desktop_id in seen:
                continue
            seen.add(desktop_id)
            yield desktop_id


def list_associated(mime_type: str,
                    mime_apps_lists: Iterable[Optional[MimeAppsListFile]],
                    mime_info_caches: Iterable[Optional[MimeInfoCacheFile]],
                    ignore_removed: bool = False) -> List[str]:
    """Merge associations for mime_type into one ordered list of desktop ids.

    Args:
        mime_type: MIME type or x-scheme-handler/<scheme>
        mime_apps_lists: mimeapps.list files, most important first. None entries are skipped.
        mime_info_caches: mimeinfo.cache files. None entries are skipped.
        ignore_removed: Include ids listed in Removed Associations

    Returns:
        Desktop ids without duplicates, not checked for existence
    """
    return list(_iter_associated(mime_type, mime_apps_lists, mime_info_caches, ignore_removed))


def list_associated_applications(mime_type, mime_apps_lists, mime_info_caches) -> List[str]:
    return list_associated(mime_type, mime_apps_lists, mime_info_caches)


def list_known_associated_applications(mime_type, mime_apps_lists, mime_info_caches) -> List[str]:
    return list_associated(mime_type, mime_apps_lists, mime_info_caches, ignore_removed=True)


def list_default_applications(mime_type: str,
                              mime_apps_lists: Iterable[Optional[MimeAppsListFile]]) -> List[str]:
    """Desktop ids from all Default Applications groups in file order, unresolved"""
    desktop_ids: List[str] = []
    for mime_apps_list in mime_apps_lists:
        if mime_apps_list is None:
            continue
        defaults = mime_apps_list.default_applications()
        if defaults is not None:
            desktop_ids.extend(defaults.list_applications(mime_type))
    return desktop_ids


class _QueryResolver:
    """Resolves each desktop id at most once per query"""

    def __init__(self, provider: ApplicationProvider):
        self._provider = provider
        self._resolved: Dict[str, Optional[DesktopApplication]] = {}

    def __call__(self, desktop_id: str) -> Optional[DesktopApplication]:
        if desktop_id not in self._resolved:
            app = self._provider.resolve(desktop_id)
            if app is not None and not app.exec_command:
                logger.debug("%s has no Exec command", desktop_id)
                app = None
            self._resolved[desktop_id] = app
        return self._resolved[desktop_id]


def _find_applications(mime_type, mime_apps_lists, mime_info_caches,
                       provider: ApplicationProvider, ignore_removed: bool) -> List[DesktopApplication]:
    resolve = _QueryResolver(provider)
    applications = []
    for desktop_id in _iter_associated(mime_type, mime_apps_lists, mime_info_caches, ignore_removed):
        app = resolve(desktop_id)
        if app is not None:
            applications.append(app)
    return applications


def find_associated_applications(mime_type: str,
                                 mime_apps_lists: Iterable[Optional[MimeAppsListFile]],
                                 mime_info_caches: Iterable[Optional[MimeInfoCacheFile]],
                                 provider: ApplicationProvider) -> List[DesktopApplication]:
    """Find applications able to open mime_type, most preferred first.

    Ids that the provider can't resolve, or that resolve to an application
    without an Exec command, are skipped.
    """
    return _find_applications(mime_type, mime_apps_lists, mime_info_caches, provider,
                              ignore_removed=False)


def find_known_associated_applications(mime_type: str,
                                       mime_apps_lists: Iterable[Optional[MimeAppsListFile]],
                                       mime_info_caches: Iterable[Optional[MimeInfoCacheFile]],
                                       provider: ApplicationProvider) -> List[DesktopApplication]:
    """Like find_associated_applications, but including explicitly removed ones"""
    return _find_applications(mime_type, mime_apps_lists, mime_info_caches, provider,
                              ignore_removed=True)


def find_default_application(mime_type: str,
                             mime_apps_lists: Iterable[Optional[MimeAppsListFile]],
                             mime_info_caches: Iterable[Optional[MimeInfoCacheFile]],
                             provider: ApplicationProvider) -> Optional[DesktopApplication]:
    """Find the default application for mime_type.

    The first usable id from Default Applications wins. Otherwise the first
    usable associated application is returned, which may come from an Added
    Associations group as well as from a cache.

    Returns:
        The application or None if nothing usable is associated
    """
    # Both passes iterate the lists, so they must not be one-shot iterators
    mime_apps_lists = list(mime_apps_lists)
    resolve = _QueryResolver(provider)

    for desktop_id in list_default_applications(mime_type, mime_apps_lists):
        app = resolve(desktop_id)
        if app is not None:
            return app

    for desktop_id in _iter_associated(mime_type, mime_apps_lists, mime_info_caches):
        app = resolve(desktop_id)
        if app is not None:
            return app

    logger.debug("No default application for %s", mime_type)
    return None
