import pytest

from networking.media_type import ContentKind, MediaType, content_kind_of, try_parse_content_type


class TestTryParseContentType:
    def test_matches_with_trailing_parameters(self):
        assert try_parse_content_type("text/html, charset=utf-8") is MediaType.HTML

    def test_matches_json_with_charset(self):
        assert try_parse_content_type("application/json; charset=utf-8") is MediaType.JSON

    def test_ignores_case(self):
        assert try_parse_content_type("Application/JSON") is MediaType.JSON

    def test_unsupported_defaults_to_binary(self):
        assert try_parse_content_type("unsupported") is MediaType.BINARY

    def test_missing_defaults_to_binary(self):
        assert try_parse_content_type(None) is MediaType.BINARY
        assert try_parse_content_type("") is MediaType.BINARY


class TestContentKindOf:
    @pytest.mark.parametrize(
        "media_type,kind",
        [
            (MediaType.PNG, ContentKind.IMAGE),
            (MediaType.SVG, ContentKind.IMAGE),
            (MediaType.PDF, ContentKind.BINARY),
            (MediaType.BINARY, ContentKind.BINARY),
            (MediaType.JSONLD, ContentKind.JSON),
            (MediaType.XML, ContentKind.TEXT),
            (MediaType.FORM_DATA, ContentKind.TEXT),
        ],
    )
    def test_groups_media_types(self, media_type, kind):
        assert content_kind_of(media_type) is kind
