"""
Reading and writing of INI-like files

mimeapps.list and mimeinfo.cache use the same grouped key=value syntax as
.desktop files. This module wraps configparser so that:

- group and key order is kept
- keys are case-sensitive (MIME types are compared verbatim)
- values are raw strings, '%' has no meaning
- a group literally named DEFAULT is an ordinary group
- leading whitespace is ignored, there are no continuation lines
- comment and blank lines are kept with the entry or group that follows them
- output is written as key=value without padding
"""
import configparser
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, TextIO, Tuple

from mimeapps.core.errors import AssociationParseError

logger = logging.getLogger(__name__)

RawGroup = Tuple[str, Dict[str, str]]

# Never matches a real group header, so configparser has no DEFAULT section.
_NO_DEFAULT_SECTION = '\x00'


@dataclass
class Comments:
    """Comment and blank lines of a file.

    `before` maps (group, None) to the lines preceding a group header and
    (group, key) to the lines preceding an entry. `trailing` holds the lines
    after the last entry of the file.
    """
    before: Dict[Tuple[str, Optional[str]], List[str]] = field(default_factory=dict)
    trailing: List[str] = field(default_factory=list)


def _make_parser(strict: bool) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=strict,
        delimiters=('=',),
        comment_prefixes=('#',),
        empty_lines_in_values=False,
        default_section=_NO_DEFAULT_SECTION,
    )
    parser.optionxform = str
    return parser


def _is_comment(line: str) -> bool:
    return not line or line.startswith('#')


def _collect_comments(lines: List[str], comments: Comments) -> None:
    group = None
    pending: List[str] = []
    for raw_line in lines:
        line = raw_line.strip()
        header = configparser.ConfigParser.SECTCRE.match(line)
        if _is_comment(line):
            pending.append(line)
        elif header:
            group = header.group('header')
            comments.before.setdefault((group, None), []).extend(pending)
            pending = []
        elif '=' in line and group is not None:
            key = line.split('=', 1)[0].strip()
            comments.before.setdefault((group, key), []).extend(pending)
            pending = []
    comments.trailing = pending


def read_groups(source: TextIO, file_name: Optional[str] = None,
                skip_malformed: bool = False,
                comments: Optional[Comments] = None) -> List[RawGroup]:
    """Parse groups from an open text stream.

    Args:
        source: Stream with the file contents
        file_name: Name used in error messages
        skip_malformed: Drop lines that are not key=value entries and merge
            duplicate groups/keys instead of failing
        comments: Filled with the comment and blank lines when given

    Returns:
        List of (group name, {key: value}) in file order

    Raises:
        AssociationParseError: If the text is not a valid INI-like file
    """
    lines = list(source)
    parser = _make_parser(strict=not skip_malformed)
    try:
        parser.read_file((line.lstrip() for line in lines), source=file_name or '<string>')
    except configparser.MissingSectionHeaderError as e:
        raise AssociationParseError("Entry outside of any group", e.lineno, file_name) from e
    except (configparser.DuplicateSectionError, configparser.DuplicateOptionError) as e:
        raise AssociationParseError(e.message, e.lineno or 0, file_name) from e
    except configparser.ParsingError as e:
        if not skip_malformed:
            line_number = e.errors[0][0] if e.errors else 0
            raise AssociationParseError("Malformed entry, expected key=value",
                                        line_number, file_name) from e
        for line_number, line in e.errors:
            logger.warning("%s:%d: skipping malformed line %s",
                           file_name or '<string>', line_number, line)

    if comments is not None:
        _collect_comments(lines, comments)
    return [(name, dict(parser.items(name, raw=True))) for name in parser.sections()]


def write_groups(groups: Iterable[RawGroup], target: TextIO,
                 comments: Optional[Comments] = None) -> None:
    """Serialize groups to a text stream.

    Groups that have no recorded comment lines are separated by a blank line.
    """
    if comments is None:
        comments = Comments()

    lines: List[str] = []
    for name, entries in groups:
        if (name, None) in comments.before:
            lines.extend(comments.before[(name, None)])
        elif lines:
            lines.append('')
        lines.append(f'[{name}]')
        for key, value in entries.items():
            lines.extend(comments.before.get((name, key), []))
            lines.append(f'{key}={value}')
    lines.extend(comments.trailing)

    for line in lines:
        target.write(line + '\n')
