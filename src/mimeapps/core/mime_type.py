"""
MIME type name validation

Keys of the association groups must look like ``media/subtype``.
"""
import string
from typing import Tuple

_VALID_SYMBOLS = frozenset(string.ascii_letters + string.digits + '-+._')


def parse_mime_type_name(name: str) -> Tuple[str, str]:
    """Split a MIME type name on the first '/'.

    Returns ('', '') when the name has no separator.
    """
    media, sep, subtype = name.partition('/')
    if not sep:
        return '', ''
    return media, subtype


def _all_symbols_are_valid(part: str) -> bool:
    return all(c in _VALID_SYMBOLS for c in part)


def is_valid_mime_type(name: str) -> bool:
    """Check if name is a well-formed media/subtype pair"""
    media, subtype = parse_mime_type_name(name)
    return bool(media and subtype
                and _all_symbols_are_valid(media)
                and _all_symbols_are_valid(subtype))
