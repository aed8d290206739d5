from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Number
from typing import Any

from lets_api.core.config import settings


@dataclass(frozen=True, slots=True)
class LimitOffset:
    limit: int
    offset: int

    @property
    def end(self) -> int:
        return self.limit + self.offset


def _is_numeric(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def parse_limit_and_offset(criteria: Mapping[str, Any] | None) -> LimitOffset:
    limit = settings.pagination_limit
    offset = settings.pagination_offset
    if criteria:
        # an empty page would point "next" back at its own offset
        if _is_numeric(criteria.get("limit")) and criteria["limit"] >= 1:
            limit = int(criteria["limit"])
        if _is_numeric(criteria.get("offset")):
            offset = int(criteria["offset"])
    return LimitOffset(limit=limit, offset=offset)


def decorate_with_paginated_response(items: list[Any], lo: LimitOffset, total: int) -> dict[str, Any]:
    paging: dict[str, int] = {"total": total}
    if lo.end < total:
        paging["next"] = lo.end
    return {"data": items, "paging": paging}
