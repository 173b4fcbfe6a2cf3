"""GitHub repository URL parsing."""

from urllib.parse import urlsplit

from forklens.exceptions import InvalidUrlError
from forklens.types.repos import RepositoryIdentifier

GITHUB_HOST = "github.com"


def parse_repo_url(url: str) -> RepositoryIdentifier:
    """
    Extract owner and repository name from a GitHub repository URL.

    Accepts absolute http(s) URLs on github.com whose path has at least two
    non-empty segments, e.g. ``https://github.com/facebook/react/tree/main``.

    Raises:
        InvalidUrlError: If the URL is empty, relative, not on github.com,
            or names no repository
    """
    if not url or not url.strip():
        raise InvalidUrlError(url, "Please enter a valid URL.")

    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError as e:
        raise InvalidUrlError(url, "Please enter a valid URL.") from e

    if parts.scheme not in ("http", "https") or not hostname:
        raise InvalidUrlError(url, "Please enter a valid URL.")

    if hostname.lower() != GITHUB_HOST:
        raise InvalidUrlError(url, "Please enter a GitHub repository URL.")

    segments = [segment for segment in parts.path.split("/") if segment]
    if len(segments) < 2:
        raise InvalidUrlError(url)

    owner, name = segments[0], segments[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise InvalidUrlError(url)

    return RepositoryIdentifier(owner=owner, name=name)
