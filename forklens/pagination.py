"""
Link-header pagination for GitHub listing endpoints.

GitHub paginates listings with a ``Link`` header of comma-separated
``<url>; rel="name"`` pairs. The walker follows ``rel="next"`` until the last
page.
"""

import re
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs, urlsplit

from forklens.logging import get_logger

if TYPE_CHECKING:
    from forklens.async_transport import AsyncHTTPTransport

logger = get_logger("http")

DEFAULT_MAX_PAGES = 100

_LINK_PART = re.compile(r'<\s*([^>]*)\s*>\s*;\s*rel\s*=\s*"?([^";]+)"?')


def parse_link_header(value: str | None) -> dict[str, str]:
    """
    Parse a Link header into a ``{rel: url}`` mapping.

    Malformed parts are skipped. A part naming several relations
    (``rel="next last"``) registers the URL under each of them.
    """
    links: dict[str, str] = {}
    if not value:
        return links

    for part in value.split(","):
        match = _LINK_PART.search(part)
        if not match:
            continue
        url, rels = match.group(1).strip(), match.group(2)
        for rel in rels.split():
            links[rel] = url
    return links


def page_number(url: str) -> int | None:
    """Return the ``page`` query parameter of a pagination URL, if any."""
    values = parse_qs(urlsplit(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


async def collect_all(
    transport: "AsyncHTTPTransport",
    path: str,
    params: dict[str, Any] | None = None,
    token: str | None = None,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> list[Any]:
    """
    Collect every item of a paginated listing.

    Args:
        transport: Transport used for each page request
        path: API path of the first page
        params: Query parameters of the first page (later pages carry their own)
        token: Access token for the requests
        max_pages: Upper bound on pages fetched

    Returns:
        All items across pages. A 404 listing yields an empty list.
    """
    items: list[Any] = []
    seen: set[str] = set()
    url: str | None = path
    page_params = params
    pages = 0

    while url is not None:
        if pages >= max_pages:
            logger.warning("Stopped paginating %s after %d pages", path, max_pages)
            break

        response = await transport.request(
            url, params=page_params, token=token, empty_on_not_found=True
        )
        pages += 1
        seen.add(url)

        body = response.body
        if isinstance(body, list):
            items.extend(body)
        elif body is not None:
            items.append(body)

        url = parse_link_header(response.link).get("next")
        page_params = None
        if url in seen:
            logger.warning("Link header for %s points back to %s, stopping", path, url)
            break

    return items
