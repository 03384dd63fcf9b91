"""
MIME type to application associations for freedesktop.org desktops

Reads mimeapps.list and mimeinfo.cache files, finds default and associated
applications for a MIME type, and edits the user's mimeapps.list.
"""
from mimeapps.core.association_group import AssociationGroup
from mimeapps.core.desktop_provider import ApplicationProvider, DesktopApplication, DesktopFileProvider
from mimeapps.core.errors import AssociationParseError, InvalidMimeTypeError, MimeAppsError
from mimeapps.core.mime_type import is_valid_mime_type
from mimeapps.core.mimeapps_list import MimeAppsListFile, mime_apps_list_files
from mimeapps.core.mimeinfo_cache import MimeInfoCacheFile, mime_info_cache_files
from mimeapps.core.resolution import (
    find_associated_applications,
    find_default_application,
    find_known_associated_applications,
    list_associated,
    list_associated_applications,
    list_default_applications,
    list_known_associated_applications,
)
from mimeapps.core.update_query import (
    AssociationUpdateQuery,
    update_associations,
    update_user_associations,
)
from mimeapps.utils.paths import XdgPaths

__version__ = "1.0.0"
