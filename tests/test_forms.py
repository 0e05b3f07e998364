"""Tests for form data parsing — URL-encoded and multipart."""

import pytest

from signpost._internal.multimap import FieldCarrier
from signpost.http.forms import FormData, is_form_content_type, parse_form_data

# ---------------------------------------------------------------------------
# FormData unit tests
# ---------------------------------------------------------------------------


class TestFormData:
    def test_getitem_returns_first(self) -> None:
        form = FormData({"color": ["red", "blue"]})
        assert form["color"] == "red"

    def test_getitem_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            FormData({})["missing"]

    def test_get_with_default(self) -> None:
        form = FormData()
        assert form.get("missing") is None
        assert form.get("missing", "fallback") == "fallback"

    def test_from_mapping(self) -> None:
        form = FormData.from_mapping({"_method": "put"})
        assert form["_method"] == "put"
        assert len(form) == 1

    def test_repr(self) -> None:
        assert repr(FormData({"a": ["1"]})) == "FormData({'a': '1'})"

    def test_field_carrier_protocol(self) -> None:
        assert isinstance(FormData(), FieldCarrier)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseFormData:
    def test_urlencoded(self) -> None:
        form = parse_form_data(b"_method=delete&title=Hello+World", "application/x-www-form-urlencoded")
        assert form["_method"] == "delete"
        assert form["title"] == "Hello World"

    def test_urlencoded_invalid_utf8_replaced(self) -> None:
        form = parse_form_data(b"_method=put&x=\xff", "application/x-www-form-urlencoded")
        assert form["_method"] == "put"
        assert form["x"] == "\ufffd"

    def test_urlencoded_with_charset(self) -> None:
        form = parse_form_data(b"a=1", "application/x-www-form-urlencoded; charset=utf-8")
        assert form["a"] == "1"

    def test_multipart_fields(self) -> None:
        body = (
            b"--XyZ\r\n"
            b'Content-Disposition: form-data; name="_method"\r\n'
            b"\r\n"
            b"delete\r\n"
            b"--XyZ\r\n"
            b'Content-Disposition: form-data; name="title"\r\n'
            b"\r\n"
            b"Hello\r\n"
            b"--XyZ--\r\n"
        )
        form = parse_form_data(body, "multipart/form-data; boundary=XyZ")
        assert form["_method"] == "delete"
        assert form["title"] == "Hello"

    def test_multipart_file_parts_skipped(self) -> None:
        body = (
            b"--XyZ\r\n"
            b'Content-Disposition: form-data; name="upload"; filename="a.txt"\r\n'
            b"Content-Type: text/plain\r\n"
            b"\r\n"
            b"file contents\r\n"
            b"--XyZ\r\n"
            b'Content-Disposition: form-data; name="_method"\r\n'
            b"\r\n"
            b"put\r\n"
            b"--XyZ--\r\n"
        )
        form = parse_form_data(body, "multipart/form-data; boundary=XyZ")
        assert "upload" not in form
        assert form["_method"] == "put"

    def test_multipart_missing_boundary(self) -> None:
        with pytest.raises(ValueError, match="boundary"):
            parse_form_data(b"", "multipart/form-data")

    def test_unsupported_content_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            parse_form_data(b"{}", "application/json")


class TestIsFormContentType:
    @pytest.mark.parametrize(
        "content_type",
        ["application/x-www-form-urlencoded", "Multipart/Form-Data; boundary=x"],
    )
    def test_form_types(self, content_type: str) -> None:
        assert is_form_content_type(content_type) is True

    @pytest.mark.parametrize("content_type", [None, "", "application/json", "text/plain"])
    def test_other_types(self, content_type: str | None) -> None:
        assert is_form_content_type(content_type) is False
