"""
Unit tests for XDG search path construction
"""
from mimeapps.utils.paths import (
    XdgPaths,
    applications_paths,
    mime_apps_list_paths,
    mime_info_cache_paths,
)


ENVIRON = {
    'HOME': '/home/user',
    'XDG_DATA_HOME': '/home/user/data',
    'XDG_DATA_DIRS': '/usr/local/data:/usr/data',
    'XDG_CONFIG_HOME': '/home/user/config',
    'XDG_CONFIG_DIRS': '/etc/xdg',
    'PATH': '/usr/bin:/bin',
}


def test_mime_apps_list_paths_without_desktop():
    paths = XdgPaths.from_environ(ENVIRON)
    assert paths.mime_apps_list_paths() == [
        "/home/user/config/mimeapps.list",
        "/etc/xdg/mimeapps.list",
        "/home/user/data/applications/mimeapps.list",
        "/usr/local/data/applications/mimeapps.list",
        "/usr/data/applications/mimeapps.list",
    ]


def test_desktop_specific_files_come_first_in_each_directory():
    paths = XdgPaths.from_environ(dict(ENVIRON, XDG_CURRENT_DESKTOP='ubuntu:GNOME'))
    assert paths.desktops == ['ubuntu', 'gnome']
    assert paths.mime_apps_list_paths()[:4] == [
        "/home/user/config/ubuntu-mimeapps.list",
        "/home/user/config/gnome-mimeapps.list",
        "/home/user/config/mimeapps.list",
        "/etc/xdg/ubuntu-mimeapps.list",
    ]
    assert paths.mime_apps_list_paths()[-1] == "/usr/data/applications/mimeapps.list"


def test_mime_info_cache_paths():
    paths = XdgPaths.from_environ(ENVIRON)
    assert paths.mime_info_cache_paths() == [
        "/home/user/data/applications/mimeinfo.cache",
        "/usr/local/data/applications/mimeinfo.cache",
        "/usr/data/applications/mimeinfo.cache",
    ]


def test_defaults():
    paths = XdgPaths.from_environ({'HOME': '/home/user'})
    assert paths.config_home == '/home/user/.config'
    assert paths.config_dirs == ['/etc/xdg']
    assert paths.data_home == '/home/user/.local/share'
    assert paths.data_dirs == ['/usr/local/share', '/usr/share']
    assert paths.desktops == []
    assert paths.writable_mime_apps_list_path() == '/home/user/.config/mimeapps.list'


def test_relative_and_empty_entries_are_ignored():
    paths = XdgPaths.from_environ(dict(ENVIRON, XDG_DATA_DIRS='relative/dir::/usr/data',
                                       XDG_CONFIG_HOME='relative'))
    assert paths.data_dirs == ['/usr/data']
    assert paths.config_home == '/home/user/.config'


def test_bin_paths():
    assert XdgPaths.from_environ(ENVIRON).bin_paths == ['/usr/bin', '/bin']


def test_module_helpers_read_process_environment(monkeypatch):
    for key, value in ENVIRON.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv('XDG_CURRENT_DESKTOP', raising=False)

    assert mime_apps_list_paths()[0] == "/home/user/config/mimeapps.list"
    assert mime_info_cache_paths()[0] == "/home/user/data/applications/mimeinfo.cache"
    assert applications_paths() == [
        "/home/user/data/applications",
        "/usr/local/data/applications",
        "/usr/data/applications",
    ]
