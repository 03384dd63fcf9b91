"""
mimeapps command line tool

    python -m mimeapps list text/plain x-scheme-handler/https
    python -m mimeapps update --file ./mimeapps.list --default text/plain:geany.desktop
    python -m mimeapps check
    python -m mimeapps crash-log view
"""
import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from mimeapps.core.desktop_provider import DesktopFileProvider
from mimeapps.core.errors import AssociationParseError
from mimeapps.core.mimeapps_list import MimeAppsListFile, mime_apps_list_files
from mimeapps.core.mimeinfo_cache import MimeInfoCacheFile, mime_info_cache_files
from mimeapps.core.resolution import find_associated_applications, find_default_application
from mimeapps.core.update_query import AssociationUpdateQuery, update_associations
from mimeapps.utils.crash_logger import CrashLogger
from mimeapps.utils.paths import XdgPaths


def _split_association(text: str) -> Tuple[str, str]:
    mime_type, sep, desktop_id = text.partition(':')
    if not sep:
        raise ValueError(text)
    return mime_type, desktop_id


def cmd_list(args, paths: XdgPaths) -> int:
    provider = DesktopFileProvider(paths.applications_paths(), paths.bin_paths)
    mime_apps_lists = mime_apps_list_files(paths.mime_apps_list_paths())
    mime_info_caches = mime_info_cache_files(paths.mime_info_cache_paths())

    print(f"Using application paths: {paths.applications_paths()}")
    print(f"Using mimeapps.list files: {[f.file_name for f in mime_apps_lists]}")
    print(f"Using mimeinfo.cache files: {[f.file_name for f in mime_info_caches]}")

    for mime_type in args.mime_types:
        default_app = find_default_application(mime_type, mime_apps_lists, mime_info_caches, provider)
        print(f"Default application for {mime_type}:")
        if default_app is None:
            print("\tCould not find default application")
        else:
            print(f"\t{default_app.path}")

        associated = find_associated_applications(mime_type, mime_apps_lists, mime_info_caches, provider)
        print(f"Applications associated with {mime_type}:")
        if associated:
            for app in associated:
                print(f"\t{app.path}")
        else:
            print("\tCould not find any application")
        print()
    return 0


def cmd_update(args, paths: XdgPaths) -> int:
    if not (args.add or args.remove or args.default):
        print("No update operations given", file=sys.stderr)
        return 1

    query = AssociationUpdateQuery()
    try:
        for text in args.remove:
            query.remove_association(*_split_association(text))
        for text in args.add:
            query.add_association(*_split_association(text))
        for text in args.default:
            query.set_default_application(*_split_association(text))
    except ValueError:
        print("Association must be given in form mimetype:desktopId", file=sys.stderr)
        return 1

    file_name = os.path.normpath(os.path.abspath(args.file))
    if file_name in paths.mime_apps_list_paths() and not args.force:
        print("Refusing to update a file used by the system, copy it or pass --force", file=sys.stderr)
        return 1

    try:
        update_associations(file_name, query)
    except (AssociationParseError, OSError) as e:
        print(f"Could not update {file_name}: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_check(args, paths: XdgPaths) -> int:
    failed = False
    candidates = [(MimeAppsListFile, p) for p in paths.mime_apps_list_paths()]
    candidates += [(MimeInfoCacheFile, p) for p in paths.mime_info_cache_paths()]

    for file_class, path in candidates:
        if not os.path.isfile(path):
            continue
        try:
            file_class(path)
        except AssociationParseError as e:
            failed = True
            print(f"Error reading {path}: at {e.line_number}: {e.message}", file=sys.stderr)
        except OSError as e:
            failed = True
            print(f"Error reading {path}: {e}", file=sys.stderr)
        else:
            print(f"OK {path}")
    return 1 if failed else 0


def cmd_crash_log(args, paths: XdgPaths) -> int:
    log_path = CrashLogger.get_log_path()
    if args.action == 'path':
        print(log_path)
    elif args.action == 'clear':
        CrashLogger.clear_log()
        print(f"Crash log cleared: {log_path}")
    elif not os.path.exists(log_path):
        print(f"No crash log found at: {log_path}")
    else:
        with open(log_path, 'r', encoding='utf-8') as f:
            print(f.read())
        print(f"Number of crashes logged: {CrashLogger.count_entries()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='mimeapps',
                                     description="Query and edit MIME type to application associations")
    parser.add_argument('-v', '--verbose', action='store_true', help="Log lookup details to stderr")
    subparsers = parser.add_subparsers(dest='command', required=True)

    list_parser = subparsers.add_parser('list', help="Show default and associated applications")
    list_parser.add_argument('mime_types', nargs='+', metavar='MIMETYPE')
    list_parser.set_defaults(func=cmd_list)

    update_parser = subparsers.add_parser('update', help="Edit a mimeapps.list file")
    update_parser.add_argument('--file', required=True, help="mimeapps.list file to update")
    update_parser.add_argument('--add', action='append', default=[], metavar='MIMETYPE:ID')
    update_parser.add_argument('--remove', action='append', default=[], metavar='MIMETYPE:ID')
    update_parser.add_argument('--default', action='append', default=[], metavar='MIMETYPE:ID')
    update_parser.add_argument('--force', action='store_true',
                               help="Allow changing a mimeapps.list from the search path")
    update_parser.set_defaults(func=cmd_update)

    check_parser = subparsers.add_parser('check', help="Validate all mimeapps.list and mimeinfo.cache files")
    check_parser.set_defaults(func=cmd_check)

    crash_parser = subparsers.add_parser('crash-log', help="Manage the crash log")
    crash_parser.add_argument('action', choices=['view', 'clear', 'path'])
    crash_parser.set_defaults(func=cmd_crash_log)

    return parser


def main(argv: Optional[List[str]] = None, paths: Optional[XdgPaths] = None) -> int:
    CrashLogger.install_exception_handler()

    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    if paths is None:
        paths = XdgPaths.from_environ()
    return args.func(args, paths)
