"""URL query-string codec for listing filter state.

Parameters: ``q`` (search text), ``filters`` (JSON of the narrowing filters),
``sortBy`` and ``sortOrder``. Decoding never fails; anything missing or
malformed takes its default.
"""

import json
import logging
from urllib.parse import parse_qs, urlencode

from pydantic import ValidationError as PydanticValidationError

from ..models import FilterState, SortBy, SortOrder

logger = logging.getLogger(__name__)

SEARCH_PARAM = "q"
FILTERS_PARAM = "filters"
SORT_BY_PARAM = "sortBy"
SORT_ORDER_PARAM = "sortOrder"


def to_params(filters: FilterState) -> dict[str, str]:
    """Query parameters for a filter state, in URL order."""
    params = {}
    if filters.search:
        params[SEARCH_PARAM] = filters.search
    params[FILTERS_PARAM] = json.dumps(filters.narrowing(), separators=(",", ":"))
    params[SORT_BY_PARAM] = filters.sort_by.value
    params[SORT_ORDER_PARAM] = filters.sort_order.value
    return params


def encode(filters: FilterState) -> str:
    """Encode a filter state as a URL query string (without leading '?').

    Never raises: lone surrogates in the search text are percent-encoded
    as-is, and decode turns them into replacement characters.
    """
    return urlencode(to_params(filters), errors="surrogatepass")


def _first(params: dict[str, list[str]], name: str) -> str:
    values = params.get(name)
    return values[0] if values else ""


def _decode_narrowing(raw: str) -> dict:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        narrowed = FilterState.model_validate(
            {k: v for k, v in data.items() if k not in (SORT_BY_PARAM, SORT_ORDER_PARAM, "search")}
        )
    except (ValueError, PydanticValidationError) as e:
        logger.warning("Ignoring malformed filters parameter %r: %s", raw, e)
        return {}
    return narrowed.model_dump(include=FilterState.NARROWING_FIELDS)


def _decode_enum(enum_cls, raw: str, default, param: str):
    if not raw:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        logger.warning("Ignoring unknown %s value %r", param, raw)
        return default


def from_params(
    search: str = "",
    filters_json: str = "",
    sort_by: str = "",
    sort_order: str = "",
) -> FilterState:
    """Rebuild a filter state from raw parameter values."""
    return FilterState(
        search=search,
        sort_by=_decode_enum(SortBy, sort_by, SortBy.DEFAULT, SORT_BY_PARAM),
        sort_order=_decode_enum(SortOrder, sort_order, SortOrder.ASC, SORT_ORDER_PARAM),
        **_decode_narrowing(filters_json),
    )


def decode(query_string: str) -> FilterState:
    """Rebuild a filter state from a URL query string."""
    params = parse_qs(query_string.lstrip("?"), keep_blank_values=True)
    return from_params(
        search=_first(params, SEARCH_PARAM),
        filters_json=_first(params, FILTERS_PARAM),
        sort_by=_first(params, SORT_BY_PARAM),
        sort_order=_first(params, SORT_ORDER_PARAM),
    )
