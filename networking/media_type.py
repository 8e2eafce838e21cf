from enum import StrEnum


class MediaType(StrEnum):
    """All media/content types the library recognizes, in matching order."""

    AVIF = "image/avif"
    BINARY = "application/octet-stream"
    BMP = "image/bmp"
    FORM_DATA = "multipart/form-data"
    GIF = "image/gif"
    GZIP = "application/gzip"
    HTML = "text/html"
    ICO = "image/vnd.microsoft.icon"
    JPEG = "image/jpeg"
    JS = "text/javascript"
    JSON = "application/json"
    JSONLD = "application/ld+json"
    PDF = "application/pdf"
    PLAIN_TEXT = "text/plain"
    PNG = "image/png"
    SVG = "image/svg+xml"
    TIFF = "image/tiff"
    WEBP = "image/webp"
    XHTML = "application/xhtml+xml"
    XML = "application/xml"
    ZIP = "application/zip"


class ContentKind(StrEnum):
    """How a response body is read from the transport."""

    JSON = "json"
    TEXT = "text"
    IMAGE = "image"
    BINARY = "binary"


_IMAGE_TYPES = frozenset(
    {
        MediaType.AVIF,
        MediaType.BMP,
        MediaType.GIF,
        MediaType.ICO,
        MediaType.JPEG,
        MediaType.PNG,
        MediaType.SVG,
        MediaType.TIFF,
        MediaType.WEBP,
    }
)

_BINARY_TYPES = frozenset({MediaType.BINARY, MediaType.ZIP, MediaType.GZIP, MediaType.PDF})

_JSON_TYPES = frozenset({MediaType.JSON, MediaType.JSONLD})


def try_parse_content_type(value: str | None) -> MediaType:
    """
    Parses a ``Content-Type`` header value into a MediaType.

    Trailing parameters are tolerated (``text/html; charset=utf-8`` is html).
    Anything unrecognized, including a missing header, is binary.
    """
    if not value:
        return MediaType.BINARY

    normalized = value.strip().lower()
    for media_type in MediaType:
        if normalized.startswith(media_type.value):
            return media_type
    return MediaType.BINARY


def content_kind_of(media_type: MediaType) -> ContentKind:
    if media_type in _IMAGE_TYPES:
        return ContentKind.IMAGE
    if media_type in _BINARY_TYPES:
        return ContentKind.BINARY
    if media_type in _JSON_TYPES:
        return ContentKind.JSON
    return ContentKind.TEXT
