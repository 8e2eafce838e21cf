from collections.abc import Mapping
from urllib.parse import urlencode, urlsplit, urlunsplit

UrlQueryParameters = Mapping[str, str | None]


def _require_absolute(url: str) -> None:
    parsed = urlsplit(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid absolute URL: {url!r}")


def append_query(url: str, query: UrlQueryParameters | None = None) -> str:
    """
    Appends ``query`` to ``url`` as an URL-encoded query string.

    ``None`` values are skipped. An empty query leaves the url untouched.
    """
    pairs = [(k, v) for k, v in (query or {}).items() if v is not None]
    if not pairs:
        return url
    separator = "&" if urlsplit(url).query else "?"
    return f"{url}{separator}{urlencode(pairs)}"


def resolve_url(base: str, endpoint: str, query: UrlQueryParameters | None = None) -> str:
    """
    Resolves an URL from a base url, a target endpoint and query parameters.

    Base and endpoint are joined with exactly one slash. An endpoint that
    starts with a slash is absolute: it replaces the whole path of the base
    (``resolve_url("https://google.com/search", "/api")`` is
    ``https://google.com/api``).
    """
    base = str(base)
    _require_absolute(base)

    if endpoint.startswith("/"):
        parsed = urlsplit(base)
        url = urlunsplit((parsed.scheme, parsed.netloc, "/" + endpoint.lstrip("/"), "", ""))
    elif endpoint:
        url = f"{base.rstrip('/')}/{endpoint}"
    else:
        url = base

    return append_query(url, query)


def swap_url(full_url: str, host_url: str) -> str:
    """
    Moves ``full_url`` under ``host_url``: scheme and host come from
    ``host_url``, the path is ``host_url``'s path followed by ``full_url``'s
    path, and ``full_url``'s query is kept.
    """
    full = urlsplit(str(full_url))
    host = urlsplit(str(host_url))
    if not host.scheme or not host.netloc:
        raise ValueError(f"Invalid absolute URL: {host_url!r}")

    path = f"{host.path.rstrip('/')}/{full.path.lstrip('/')}"
    return urlunsplit((host.scheme, host.netloc, path, full.query, ""))
