# =============================================================================
# core/query.py  -  Query Builder
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Translates validated FetchParams into the query string of
#   GET /api/v2/items.  Qiita has a small search mini-language carried in the
#   single `query` parameter:
#
#       created:>=2023-01-01 created:<=2023-12-31 tag:Ruby,Rails
#
#   The clauses always appear in that fixed order, separated by one space.
#   An empty tags list adds nothing, exactly as if tags were absent.
#
# DATES:
#   Only the calendar date is used, formatted YYYY-MM-DD.  It comes from the
#   date's own year/month/day; nothing is shifted to UTC.  (The lenient
#   parameter stage already reduced any datetime to its own calendar date.)
#
# ENCODING:
#   urlencode() percent-encodes the clauses and turns spaces into "+", the
#   same form-encoding browsers use for URLSearchParams.
# =============================================================================

from datetime import date
from urllib.parse import urlencode

from core.models import FetchParams


def format_date(value: date) -> str:
    """Zero-padded YYYY-MM-DD of the date's own calendar fields."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def build_search_query(params: FetchParams) -> str:
    """Build the composite `query` value, or "" if no clause applies."""
    clauses = []
    if params.created_from is not None:
        clauses.append(f"created:>={format_date(params.created_from)}")
    if params.created_to is not None:
        clauses.append(f"created:<={format_date(params.created_to)}")
    if params.tags:
        clauses.append(f"tag:{','.join(params.tags)}")
    return " ".join(clauses)


def build_query_string(params: FetchParams) -> str:
    """Encode page, per_page and query, in that order.  "" when nothing is set."""
    pairs = []
    if params.page is not None:
        pairs.append(("page", str(params.page)))
    if params.per_page is not None:
        pairs.append(("per_page", str(params.per_page)))
    search = build_search_query(params)
    if search:
        pairs.append(("query", search))
    return urlencode(pairs)


def build_items_url(base_url: str, params: FetchParams) -> str:
    """Full listing URL.  No "?" suffix when the query string is empty."""
    query_string = build_query_string(params)
    url = f"{base_url.rstrip('/')}/items"
    return f"{url}?{query_string}" if query_string else url
