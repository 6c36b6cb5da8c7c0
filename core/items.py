# =============================================================================
# core/items.py  -  Item Fetcher & the full pipeline
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   fetch_raw_items()  one GET {base}/items?{query} with a bearer token
#   fetch_items()      fetch_raw_items() + projection
#   get_items()        loose arguments -> validate -> fetch -> project
#
# HOW IT WORKS (the flow):
#   1. parse_params() normalizes and validates the caller's arguments
#      (raises ValidationError before any network traffic)
#   2. build_items_url() turns FetchParams into the request URL
#   3. httpx sends exactly ONE request: no timeout, no retry
#   4. A non-success status raises RequestError(status_code)
#      a success body that is not a JSON array raises ResponseError
#   5. Each record in the JSON array is projected to the requested fields
#
# TRANSPORT ERRORS:
#   If no response can be obtained at all, httpx raises an httpx.HTTPError
#   subclass.  We let it propagate unchanged; the tool layer reports it.
#
# TESTING:
#   Every function takes an optional `client`.  Tests pass an
#   httpx.AsyncClient built on httpx.MockTransport, so nothing touches the
#   network.  A client we did not create is never closed here.
# =============================================================================

import logging
from typing import Any, Mapping, Optional

import httpx

from core.config import BASE_URL, QIITA_API_ACCESS_TOKEN
from core.errors import RequestError, ResponseError
from core.models import FetchParams, ProjectedItem, RawItem
from core.params import parse_params
from core.projector import project_items
from core.query import build_items_url

logger = logging.getLogger(__name__)


async def _send(client: httpx.AsyncClient, url: str, access_token: str) -> httpx.Response:
    return await client.get(url, headers={"Authorization": f"Bearer {access_token}"})


async def fetch_raw_items(
    params: FetchParams,
    *,
    client: Optional[httpx.AsyncClient] = None,
    base_url: str = BASE_URL,
    access_token: str = QIITA_API_ACCESS_TOKEN,
) -> list[RawItem]:
    """Issue the listing request and return the decoded JSON array.

    Raises:
        RequestError: the response status was not a success (2xx).
        ResponseError: a success response whose body is not a JSON array.
        httpx.HTTPError: the request could not complete at all.
    """
    url = build_items_url(base_url, params)
    logger.debug("GET %s", url)

    if client is None:
        async with httpx.AsyncClient(timeout=None) as own_client:
            response = await _send(own_client, url, access_token)
    else:
        response = await _send(client, url, access_token)

    logger.debug("Qiita answered %s", response.status_code)
    if not response.is_success:
        raise RequestError(response.status_code)

    try:
        data = response.json()
    except ValueError as exc:
        raise ResponseError("Response body is not valid JSON") from exc
    if not isinstance(data, list):
        raise ResponseError(f"Expected a JSON array of items, got {type(data).__name__}")

    logger.debug("Decoded %d raw items", len(data))
    return data


async def fetch_items(
    params: FetchParams,
    *,
    client: Optional[httpx.AsyncClient] = None,
    base_url: str = BASE_URL,
    access_token: str = QIITA_API_ACCESS_TOKEN,
) -> list[ProjectedItem]:
    """Fetch items for already-validated params and project each one."""
    raw_items = await fetch_raw_items(
        params, client=client, base_url=base_url, access_token=access_token
    )
    return project_items(raw_items, params.additional_fields)


async def get_items(
    arguments: Optional[Mapping[str, Any]] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    base_url: str = BASE_URL,
    access_token: str = QIITA_API_ACCESS_TOKEN,
) -> list[ProjectedItem]:
    """Full pipeline for loosely-typed arguments from a remote caller.

    Raises:
        ValidationError: the arguments failed the schema (no request is sent).
        RequestError: upstream answered with a non-success status.
        httpx.HTTPError: the request could not complete.
    """
    params = parse_params(arguments)
    return await fetch_items(
        params, client=client, base_url=base_url, access_token=access_token
    )
