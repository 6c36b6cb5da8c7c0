# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the Qiita items tool.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any other tool framework.
#   The only third-party pieces here are pydantic (the parameter schema) and
#   httpx (the one outbound call).  Everything else is plain Python that can
#   be exercised from a REPL or a unit test without a running server.
#
# The pipeline, in order:
#   params.py     loose remote arguments  ->  validated FetchParams
#   query.py      FetchParams             ->  "?page=..&query=.."
#   items.py      one GET to {base}/items ->  list of raw item dicts
#   projector.py  raw item dict           ->  trimmed item dict
# =============================================================================
