from lets_api.core.config import settings
from lets_api.core.pagination import LimitOffset, decorate_with_paginated_response, parse_limit_and_offset


def test_parse_limit_and_offset_uses_configured_defaults() -> None:
    lo = parse_limit_and_offset(None)

    assert lo == LimitOffset(limit=settings.pagination_limit, offset=settings.pagination_offset)


def test_parse_limit_and_offset_prefers_numeric_criteria() -> None:
    lo = parse_limit_and_offset({"limit": 3, "offset": 9})

    assert lo.limit == 3
    assert lo.offset == 9
    assert lo.end == 12


def test_parse_limit_and_offset_ignores_non_numeric_values() -> None:
    lo = parse_limit_and_offset({"limit": "10", "offset": None})
    flags = parse_limit_and_offset({"limit": True, "offset": False})

    assert lo.limit == settings.pagination_limit
    assert lo.offset == settings.pagination_offset
    assert flags == LimitOffset(limit=settings.pagination_limit, offset=settings.pagination_offset)


def test_paginated_response_omits_next_on_last_page() -> None:
    response = decorate_with_paginated_response(["a"], LimitOffset(limit=2, offset=4), total=5)

    assert response == {"data": ["a"], "paging": {"total": 5}}


def test_paginated_response_points_next_to_following_page() -> None:
    response = decorate_with_paginated_response(["a", "b"], LimitOffset(limit=2, offset=0), total=5)

    assert response["paging"] == {"total": 5, "next": 2}


def test_paginated_response_for_exact_fit_has_no_next() -> None:
    response = decorate_with_paginated_response(["a", "b"], LimitOffset(limit=2, offset=3), total=5)

    assert "next" not in response["paging"]


def test_parse_limit_and_offset_ignores_non_positive_limit() -> None:
    lo = parse_limit_and_offset({"limit": 0, "offset": 4})

    assert lo == LimitOffset(limit=settings.pagination_limit, offset=4)
