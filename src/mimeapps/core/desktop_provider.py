"""
Desktop applications and their lookup by desktop id
"""
import configparser
import logging
import os
import shutil
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from mimeapps.utils.paths import bin_paths as default_bin_paths

logger = logging.getLogger(__name__)

DESKTOP_ENTRY = 'Desktop Entry'


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ['true', '1', 'yes']


def _parse_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(';') if item.strip()]


class DesktopApplication:
    """Represents a desktop application"""

    def __init__(self, desktop_file_path: str, desktop_id: Optional[str] = None):
        """
        Args:
            desktop_file_path: Path of the .desktop file
            desktop_id: Id the file was found by. Defaults to the file name.

        Raises:
            OSError: If the file can't be read
        """
        self.path = desktop_file_path
        self.desktop_id = desktop_id or os.path.basename(desktop_file_path)
        self.name = ""
        self.exec_command = ""
        self.try_exec = ""
        self.mime_types: List[str] = []
        self.no_display = False
        self.hidden = False

        self._parse_desktop_file()

    def _parse_desktop_file(self):
        """Parse the .desktop file"""
        with open(self.path, 'r', encoding='utf-8') as f:
            content = f.read()

        config = configparser.ConfigParser(interpolation=None, strict=False)
        try:
            config.read_string(content, source=self.path)
        except configparser.Error:
            # Duplicate keys, stray lines and the like
            self._parse_desktop_file_manual(content)
            return

        if DESKTOP_ENTRY not in config:
            return
        entry = config[DESKTOP_ENTRY]
        self._apply_entry({key: entry.get(key, '') for key in entry})

    def _parse_desktop_file_manual(self, content: str):
        """Manual parsing for problematic desktop files. First occurrence of a key wins."""
        values: Dict[str, str] = {}
        in_desktop_entry = False
        for line in content.splitlines():
            line = line.strip()

            if line.startswith('[') and line.endswith(']'):
                in_desktop_entry = line == f'[{DESKTOP_ENTRY}]'
                continue
            if not in_desktop_entry or not line or line.startswith('#') or '=' not in line:
                continue

            key, value = line.split('=', 1)
            values.setdefault(key.strip().lower(), value.strip())
        self._apply_entry(values)

    def _apply_entry(self, values: Dict[str, str]):
        # configparser lower-cases keys, the manual parser does the same
        self.name = values.get('name', '')
        self.exec_command = values.get('exec', '')
        self.try_exec = values.get('tryexec', '')
        self.no_display = _parse_bool(values.get('nodisplay', ''))
        self.hidden = _parse_bool(values.get('hidden', ''))
        self.mime_types = _parse_list(values.get('mimetype', ''))

    def __repr__(self):
        return f"DesktopApplication(desktop_id={self.desktop_id!r}, path={self.path!r})"


class ApplicationProvider(ABC):
    """Looks up applications by desktop id"""

    @abstractmethod
    def resolve(self, desktop_id: str) -> Optional[DesktopApplication]:
        """Return the application for desktop_id, or None if it is not usable.

        Must not raise for missing or broken applications.
        """


def desktop_file_candidates(desktop_id: str) -> List[str]:
    """Relative paths a desktop id may be stored at.

    Following the Desktop Entry rules for ids, 'kde4-kate.desktop' can live at
    kde4-kate.desktop or kde4/kate.desktop.
    """
    candidates = [desktop_id]
    parts = desktop_id.split('-')
    for i in range(1, len(parts)):
        candidates.append(os.path.join(*parts[:i], '-'.join(parts[i:])))
    return candidates


def find_desktop_file(desktop_id: str, applications_paths: Iterable[str]) -> Optional[Tuple[str, str]]:
    """Find the .desktop file for desktop_id.

    Returns:
        (file path, base directory) or None if not found
    """
    if not desktop_id or os.path.basename(desktop_id) != desktop_id:
        return None
    for base_dir in applications_paths:
        for candidate in desktop_file_candidates(desktop_id):
            file_path = os.path.join(base_dir, candidate)
            if os.path.isfile(file_path):
                return file_path, base_dir
    return None


class DesktopFileProvider(ApplicationProvider):
    """Application provider reading .desktop files from applications directories.

    Applications that are Hidden or whose TryExec program can't be found are
    treated as missing. Found applications are cached by desktop id; with
    check_mtime the cached entry is re-read when the file changes on disk.
    """

    def __init__(self, applications_paths: Iterable[str],
                 bin_paths: Optional[Iterable[str]] = None,
                 check_mtime: bool = False):
        self._base_dirs = list(applications_paths)
        self._bin_paths = list(bin_paths) if bin_paths is not None else default_bin_paths()
        self._check_mtime = check_mtime
        self._cache: Dict[str, Tuple[DesktopApplication, float]] = {}

    @property
    def applications_paths(self) -> List[str]:
        return list(self._base_dirs)

    def resolve(self, desktop_id: str) -> Optional[DesktopApplication]:
        cached = self._cache.get(desktop_id)
        if cached is not None:
            app, mtime = cached
            if not self._check_mtime or self._mtime(app.path) == mtime:
                return app
            del self._cache[desktop_id]

        found = find_desktop_file(desktop_id, self._base_dirs)
        if found is None:
            logger.debug("No desktop file for %s", desktop_id)
            return None

        file_path = found[0]
        mtime = self._mtime(file_path)
        try:
            app = DesktopApplication(file_path, desktop_id)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Can't read %s: %s", file_path, e)
            return None

        if app.hidden:
            logger.debug("%s is hidden", file_path)
            return None
        if app.try_exec and not self.executable_exists(app.try_exec):
            logger.debug("TryExec %s of %s not found", app.try_exec, desktop_id)
            return None

        self._cache[desktop_id] = (app, mtime)
        return app

    def executable_exists(self, program: str) -> bool:
        return shutil.which(program, path=os.pathsep.join(self._bin_paths)) is not None

    def clear_cache(self):
        self._cache.clear()

    @staticmethod
    def _mtime(path: str) -> float:
        try:
            return os.stat(path).st_mtime
        except OSError:
            return -1.0
