"""
XDG search paths for association files

Implements the lookup order of the freedesktop.org mime-apps standard:

    $XDG_CONFIG_HOME/$desktop-mimeapps.list
    $XDG_CONFIG_HOME/mimeapps.list
    $XDG_CONFIG_DIRS/$desktop-mimeapps.list
    $XDG_CONFIG_DIRS/mimeapps.list
    $XDG_DATA_HOME/applications/$desktop-mimeapps.list   (deprecated)
    $XDG_DATA_HOME/applications/mimeapps.list            (deprecated)
    $XDG_DATA_DIRS/applications/$desktop-mimeapps.list
    $XDG_DATA_DIRS/applications/mimeapps.list

The environment is read once into an XdgPaths object, so lookups can be
driven by any mapping instead of the live process environment.
"""
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

MIMEAPPS_LIST = 'mimeapps.list'
MIMEINFO_CACHE = 'mimeinfo.cache'
APPLICATIONS = 'applications'


def _split_dirs(value: Optional[str], default: str) -> List[str]:
    # Relative entries are invalid under the XDG Base Directory rules
    value = value or default
    return [d for d in value.split(':') if d and os.path.isabs(d)]


def _single_dir(value: Optional[str], default: str) -> str:
    if value and os.path.isabs(value):
        return value
    return default


@dataclass
class XdgPaths:
    config_home: str
    config_dirs: List[str] = field(default_factory=list)
    data_home: str = ''
    data_dirs: List[str] = field(default_factory=list)
    desktops: List[str] = field(default_factory=list)  # lower-cased, in XDG_CURRENT_DESKTOP order
    bin_paths: List[str] = field(default_factory=list)

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> 'XdgPaths':
        """Build search paths from an environment mapping (os.environ by default)"""
        if environ is None:
            environ = os.environ
        home = environ.get('HOME') or os.path.expanduser('~')

        desktops = [d.lower() for d in environ.get('XDG_CURRENT_DESKTOP', '').split(':') if d]
        bin_paths = [d for d in environ.get('PATH', os.defpath).split(os.pathsep) if d]

        return cls(
            config_home=_single_dir(environ.get('XDG_CONFIG_HOME'), os.path.join(home, '.config')),
            config_dirs=_split_dirs(environ.get('XDG_CONFIG_DIRS'), '/etc/xdg'),
            data_home=_single_dir(environ.get('XDG_DATA_HOME'), os.path.join(home, '.local', 'share')),
            data_dirs=_split_dirs(environ.get('XDG_DATA_DIRS'), '/usr/local/share:/usr/share'),
            desktops=desktops,
            bin_paths=bin_paths,
        )

    def _list_files_in(self, directory: str) -> List[str]:
        names = [f"{desktop}-{MIMEAPPS_LIST}" for desktop in self.desktops] + [MIMEAPPS_LIST]
        return [os.path.join(directory, name) for name in names]

    def mime_apps_list_paths(self) -> List[str]:
        """Candidate mimeapps.list paths, most important first. Existence is not checked."""
        directories = [self.config_home] + self.config_dirs
        if self.data_home:
            directories.append(os.path.join(self.data_home, APPLICATIONS))
        directories += [os.path.join(d, APPLICATIONS) for d in self.data_dirs]

        paths = []
        for directory in directories:
            paths.extend(self._list_files_in(directory))
        return paths

    def applications_paths(self) -> List[str]:
        """applications/ directories holding .desktop files, most important first"""
        data_dirs = ([self.data_home] if self.data_home else []) + self.data_dirs
        return [os.path.join(d, APPLICATIONS) for d in data_dirs]

    def mime_info_cache_paths(self) -> List[str]:
        return [os.path.join(d, MIMEINFO_CACHE) for d in self.applications_paths()]

    def writable_mime_apps_list_path(self) -> str:
        """The user's own mimeapps.list, where changes should be written"""
        return os.path.join(self.config_home, MIMEAPPS_LIST)


def mime_apps_list_paths() -> List[str]:
    return XdgPaths.from_environ().mime_apps_list_paths()


def mime_info_cache_paths() -> List[str]:
    return XdgPaths.from_environ().mime_info_cache_paths()


def applications_paths() -> List[str]:
    return XdgPaths.from_environ().applications_paths()


def bin_paths() -> List[str]:
    return XdgPaths.from_environ().bin_paths
