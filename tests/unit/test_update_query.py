"""
Unit tests for AssociationUpdateQuery and update_associations
"""
import pytest

from mimeapps.core.errors import AssociationParseError
from mimeapps.core.mimeapps_list import MimeAppsListFile
from mimeapps.core.update_query import (
    ADD,
    SET_ADDED,
    AssociationUpdateQuery,
    Operation,
    update_associations,
    update_user_associations,
)
from mimeapps.utils.paths import XdgPaths


def sample_query():
    query = AssociationUpdateQuery()
    query.add_association("text/plain", "geany.desktop")
    query.remove_association("text/plain", "kate.desktop")
    query.set_default_application("image/png", "gthumb.desktop")
    query.set_added_associations("application/pdf", ["okular.desktop", "evince.desktop"])
    return query


class TestAssociationUpdateQuery:
    def test_operations_are_recorded_in_order(self):
        query = sample_query()
        assert len(query) == 4
        assert query.operations[0] == Operation("text/plain", "geany.desktop", ADD)
        assert query.operations[3] == Operation("application/pdf", "okular.desktop;evince.desktop;", SET_ADDED)

    def test_empty_query(self):
        query = AssociationUpdateQuery()
        assert not query
        mime_apps_list = MimeAppsListFile()
        query.apply(mime_apps_list)
        assert mime_apps_list.group_names() == []

    def test_builder_chaining(self):
        query = AssociationUpdateQuery().add_association("a/b", "x.desktop").remove_association("a/b", "y.desktop")
        assert len(query) == 2

    def test_set_added_list_is_copied_when_recorded(self):
        desktop_ids = ["okular.desktop"]
        query = AssociationUpdateQuery().set_added_associations("application/pdf", desktop_ids)
        desktop_ids.append("evince.desktop")

        mime_apps_list = MimeAppsListFile()
        query.apply(mime_apps_list)

        assert mime_apps_list.added_associations().list_applications("application/pdf") == ["okular.desktop"]

    def test_apply(self):
        mime_apps_list = MimeAppsListFile.from_string(
            "[Added Associations]\ntext/plain=kate.desktop;\n"
        )
        sample_query().apply(mime_apps_list)

        added = mime_apps_list.added_associations()
        assert added.list_applications("text/plain") == ["geany.desktop"]
        assert added.list_applications("image/png") == ["gthumb.desktop"]
        assert added.list_applications("application/pdf") == ["okular.desktop", "evince.desktop"]
        assert mime_apps_list.removed_associations().list_applications("text/plain") == ["kate.desktop"]
        assert mime_apps_list.default_applications().list_applications("image/png") == ["gthumb.desktop"]

    def test_replay_on_different_files_is_equivalent(self):
        query = sample_query()
        first, second = MimeAppsListFile(), MimeAppsListFile()
        query.apply(first)
        query.apply(second)
        assert first.to_string() == second.to_string()

    def test_order_matters(self):
        remove_then_add = AssociationUpdateQuery()
        remove_then_add.remove_association("text/plain", "kate.desktop")
        remove_then_add.add_association("text/plain", "kate.desktop")
        add_then_remove = AssociationUpdateQuery()
        add_then_remove.add_association("text/plain", "kate.desktop")
        add_then_remove.remove_association("text/plain", "kate.desktop")

        first, second = MimeAppsListFile(), MimeAppsListFile()
        remove_then_add.apply(first)
        add_then_remove.apply(second)

        assert first.added_associations().list_applications("text/plain") == ["kate.desktop"]
        assert first.removed_associations().list_applications("text/plain") == []
        assert second.added_associations().list_applications("text/plain") == []
        assert second.removed_associations().list_applications("text/plain") == ["kate.desktop"]


class TestUpdateAssociations:
    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "config" / "mimeapps.list"

        update_associations(str(path), AssociationUpdateQuery().set_default_application("text/plain", "geany.desktop"))

        assert path.read_text() == (
            "[Default Applications]\ntext/plain=geany.desktop;\n\n"
            "[Added Associations]\ntext/plain=geany.desktop;\n"
        )

    def test_keeps_foreign_content(self, tmp_path):
        path = tmp_path / "mimeapps.list"
        path.write_text(
            "[Default Applications]\nnot-a-mime-type=keep.desktop\n\n"
            "[X-Vendor]\nSetting=1\n"
        )

        update_associations(str(path), AssociationUpdateQuery().add_association("text/plain", "geany.desktop"))

        reread = MimeAppsListFile(str(path), strict=False)
        assert reread.default_applications().value("not-a-mime-type") == "keep.desktop"
        assert reread.group("X-Vendor") == {"Setting": "1"}
        assert reread.added_associations().list_applications("text/plain") == ["geany.desktop"]

    def test_keeps_comments(self, tmp_path):
        path = tmp_path / "mimeapps.list"
        path.write_text(
            "# my overrides\n"
            "[Default Applications]\n"
            "# browser\n"
            "x-scheme-handler/http=firefox.desktop;\n"
        )

        update_associations(str(path), AssociationUpdateQuery().add_association("text/plain", "geany.desktop"))

        assert path.read_text() == (
            "# my overrides\n"
            "[Default Applications]\n"
            "# browser\n"
            "x-scheme-handler/http=firefox.desktop;\n"
            "\n"
            "[Added Associations]\n"
            "text/plain=geany.desktop;\n"
        )

    def test_undecodable_file_is_left_alone(self, tmp_path):
        path = tmp_path / "mimeapps.list"
        original = b"[Added Associations]\ntext/plain=\xff.desktop;\n"
        path.write_bytes(original)

        with pytest.raises(AssociationParseError):
            update_associations(str(path), AssociationUpdateQuery().add_association("text/plain", "a.desktop"))
        assert path.read_bytes() == original

    def test_unparsable_file_is_left_alone(self, tmp_path):
        path = tmp_path / "mimeapps.list"
        original = "[Added Associations]\nthis line is broken\n"
        path.write_text(original)

        with pytest.raises(AssociationParseError):
            update_associations(str(path), AssociationUpdateQuery().add_association("text/plain", "a.desktop"))
        assert path.read_text() == original

    def test_unwritable_target_raises_os_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        with pytest.raises(OSError):
            update_associations(str(blocker / "mimeapps.list"),
                                AssociationUpdateQuery().add_association("text/plain", "a.desktop"))

    def test_user_file(self, xdg_tree):
        paths = XdgPaths.from_environ(xdg_tree)

        update_user_associations(AssociationUpdateQuery().add_association("text/plain", "a.desktop"), paths)

        reread = MimeAppsListFile(paths.writable_mime_apps_list_path())
        assert reread.added_associations().list_applications("text/plain") == ["a.desktop"]
