"""
Unit tests for MIME type name validation
"""
import pytest

from mimeapps.core.mime_type import is_valid_mime_type, parse_mime_type_name


class TestParseMimeTypeName:
    def test_splits_on_first_slash(self):
        assert parse_mime_type_name("text/plain") == ("text", "plain")
        assert parse_mime_type_name("a/b/c") == ("a", "b/c")

    def test_no_slash(self):
        assert parse_mime_type_name("not mime type") == ("", "")


@pytest.mark.parametrize("name", [
    "text/plain",
    "text/plain2",
    "text/vnd.type",
    "x-scheme-handler/http",
    "image/svg+xml",
    "application/x_custom-type.v2",
])
def test_valid_names(name):
    assert is_valid_mime_type(name)


@pytest.mark.parametrize("name", [
    "",
    "not mime type",
    "not()/valid",
    "not/valid{}",
    "text/",
    "/plain",
    "/",
    "text/plain/extra",
    "text /plain",
    "tëxt/plain",
])
def test_invalid_names(name):
    assert not is_valid_mime_type(name)
