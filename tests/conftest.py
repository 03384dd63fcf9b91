import sys
import textwrap
from pathlib import Path

import pytest

# Add src directory to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / 'src'
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from mimeapps.core.desktop_provider import ApplicationProvider


MIMEAPPS_LIST = """\
[Added Associations]
text/plain=geany.desktop;kde4-kwrite.desktop;
image/png=kde4-gwenview.desktop;gthumb.desktop;

[Removed Associations]
text/plain=libreoffice-writer.desktop;

[Default Applications]
text/plain=kde4-kate.desktop
x-scheme-handler/http=chromium.desktop;iceweasel.desktop;
"""

MIMEINFO_CACHE = """\
[MIME Cache]
text/plain=geany.desktop;emacs.desktop;libreoffice-writer.desktop;
image/png=gthumb.desktop;
application/pdf=okular.desktop;
"""


@pytest.fixture
def mimeapps_list_text():
    return MIMEAPPS_LIST


@pytest.fixture
def mimeinfo_cache_text():
    return MIMEINFO_CACHE


class FakeApp:
    """Minimal application descriptor"""

    def __init__(self, desktop_id, exec_command='run'):
        self.desktop_id = desktop_id
        self.exec_command = exec_command

    def __repr__(self):
        return f"FakeApp({self.desktop_id!r})"


class FakeProvider(ApplicationProvider):
    """Resolves a fixed set of desktop ids and records every lookup"""

    def __init__(self, known=(), no_exec=()):
        self.apps = {desktop_id: FakeApp(desktop_id) for desktop_id in known}
        self.apps.update({desktop_id: FakeApp(desktop_id, exec_command='') for desktop_id in no_exec})
        self.calls = []

    def resolve(self, desktop_id):
        self.calls.append(desktop_id)
        return self.apps.get(desktop_id)


@pytest.fixture
def provider_factory():
    return FakeProvider


def write_desktop_file(directory: Path, relative_path: str, name: str,
                       exec_command: str = 'true', extra: str = '') -> Path:
    """Create a .desktop file below directory"""
    path = directory / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    content = textwrap.dedent(f"""\
        [Desktop Entry]
        Type=Application
        Name={name}
        Exec={exec_command}
        """) + extra
    path.write_text(content, encoding='utf-8')
    return path


@pytest.fixture
def desktop_file_factory():
    return write_desktop_file


@pytest.fixture
def xdg_tree(tmp_path):
    """A fake XDG layout with a user config dir and one system data dir"""
    home = tmp_path / 'home'
    config_home = home / '.config'
    data_home = home / '.local' / 'share'
    system_data = tmp_path / 'usr' / 'share'
    system_config = tmp_path / 'etc' / 'xdg'
    for d in (config_home, data_home / 'applications', system_data / 'applications', system_config):
        d.mkdir(parents=True)

    environ = {
        'HOME': str(home),
        'XDG_CONFIG_HOME': str(config_home),
        'XDG_CONFIG_DIRS': str(system_config),
        'XDG_DATA_HOME': str(data_home),
        'XDG_DATA_DIRS': str(system_data),
        'XDG_CURRENT_DESKTOP': '',
        'PATH': str(tmp_path / 'bin'),
    }
    return environ
