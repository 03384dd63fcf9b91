"""
Common file handling for mimeapps.list and mimeinfo.cache
"""
import io
import logging
from typing import Dict, List, Optional, TextIO, Tuple, Union

from mimeapps.core import inilike
from mimeapps.core.association_group import AssociationGroup
from mimeapps.core.errors import AssociationParseError

logger = logging.getLogger(__name__)

Group = Union[AssociationGroup, Dict[str, str]]


class AssociationFile:
    """INI-like file whose known groups are association groups.

    Groups not listed in KNOWN_GROUPS are kept as plain dicts so they are
    written back unchanged. Comment and blank lines are written back in
    front of the group or entry they preceded.
    """

    KNOWN_GROUPS: Tuple[str, ...] = ()

    def __init__(self, file_name: Optional[str] = None, strict: bool = True,
                 skip_malformed: Optional[bool] = None):
        """
        Args:
            file_name: Path to read. None creates an empty file.
            strict: Reject keys of known groups that are not MIME types.
                When False such entries are kept but ignored by queries.
            skip_malformed: Skip malformed lines. Defaults to not strict.

        Raises:
            OSError: If the file can't be opened
            AssociationParseError: If the contents can't be parsed
        """
        self.file_name = str(file_name) if file_name is not None else None
        self._groups: Dict[str, Group] = {}
        self._comments = inilike.Comments()
        if file_name is None:
            self._init_empty()
            return

        try:
            with open(file_name, 'r', encoding='utf-8') as f:
                self._read(f, strict, skip_malformed)
        except UnicodeDecodeError as e:
            raise AssociationParseError(f"Not valid UTF-8: {e.reason}", file_name=self.file_name) from e

    @classmethod
    def from_string(cls, text: str, strict: bool = True,
                    skip_malformed: Optional[bool] = None):
        """Parse an in-memory source"""
        instance = cls.__new__(cls)
        instance.file_name = None
        instance._groups = {}
        instance._comments = inilike.Comments()
        instance._read(io.StringIO(text), strict, skip_malformed)
        return instance

    def _init_empty(self) -> None:
        pass

    def _read(self, source: TextIO, strict: bool, skip_malformed: Optional[bool]) -> None:
        if skip_malformed is None:
            skip_malformed = not strict

        for name, entries in inilike.read_groups(source, self.file_name, skip_malformed, self._comments):
            if name not in self.KNOWN_GROUPS:
                self._groups[name] = entries
                continue
            group = AssociationGroup(name, entries)
            if strict:
                group.validate(self.file_name)
            self._groups[name] = group
        self._check_required_groups()

    def _check_required_groups(self) -> None:
        pass

    def group(self, name: str) -> Optional[Group]:
        """Get a group by name, typed for known groups"""
        return self._groups.get(name)

    def group_names(self) -> List[str]:
        return list(self._groups)

    def _association_group(self, name: str) -> Optional[AssociationGroup]:
        group = self._groups.get(name)
        return group if isinstance(group, AssociationGroup) else None

    def _ensure_group(self, name: str) -> AssociationGroup:
        group = self._association_group(name)
        if group is None:
            group = AssociationGroup(name)
            self._groups[name] = group
        return group

    def to_string(self) -> str:
        output = io.StringIO()
        self.write(output)
        return output.getvalue()

    def write(self, target: TextIO) -> None:
        groups = [
            (name, group.entries() if isinstance(group, AssociationGroup) else dict(group))
            for name, group in self._groups.items()
        ]
        inilike.write_groups(groups, target, self._comments)

    def save(self, file_name: Optional[str] = None) -> None:
        """Write the file to file_name, or back to where it was read from"""
        path = file_name if file_name is not None else self.file_name
        if path is None:
            raise ValueError("No file name to save to")
        with open(path, 'w', encoding='utf-8') as f:
            self.write(f)
        logger.debug("Saved %s", path)

    def __repr__(self):
        return f"{type(self).__name__}(file_name={self.file_name!r}, groups={self.group_names()!r})"
