"""Page parameters.

JSON:API leaves the pagination strategy to the server
(https://jsonapi.org/format/#fetching-pagination), the query string carries
the parameters in the ``page`` family: ``page[number]``/``page[size]`` for paged
pagination and ``page[offset]``/``page[limit]`` for offset pagination.

Clients regularly send partial, empty or garbage values. These never raise:
a value that doesn't parse to a positive integer is treated as absent so the
paginator falls back to its default.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

PAGE_KEYS = ("number", "size", "offset", "limit")
PAGE_ARG_RE = re.compile(r"^page\[(\w+)\]$")


def parse_page_value(value: Any) -> Optional[int]:
    """
    :param value: raw page parameter value, eg. "2", 2 or ""
    :return: the value as a positive int, None if it's missing, zero, negative or unparsable
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            result = int(value)
        else:
            result = int(str(value).strip())
    except (TypeError, ValueError, OverflowError):
        return None
    return result if result > 0 else None


@dataclass(frozen=True)
class PageParams:
    """Normalized page parameters, absent values are None"""

    number: Optional[int] = None
    size: Optional[int] = None
    offset: Optional[int] = None
    limit: Optional[int] = None

    @classmethod
    def normalize(cls, raw: Optional[Mapping[str, Any]] = None) -> "PageParams":
        """
        :param raw: mapping with (a subset of) the number, size, offset and limit keys
        :return: PageParams
        """
        if not raw:
            return cls()
        return cls(**{key: parse_page_value(raw.get(key)) for key in PAGE_KEYS})

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "PageParams":
        """
        :param args: url query arguments, eg. request.args: {"page[number]": "2", "page[size]": "10", "sort": "id"}
        :return: PageParams
        """
        raw = {}
        for arg, val in args.items():
            page_arg = PAGE_ARG_RE.search(arg)
            if page_arg:
                raw[page_arg.group(1)] = val
        return cls.normalize(raw)

    def number_or_first(self) -> int:
        return self.number or 1

    def size_or_default(self, default_size: int) -> int:
        return self.size or default_size

    def offset_or_zero(self) -> int:
        return self.offset or 0

    def limit_or_default(self, default_size: int) -> int:
        return self.limit or default_size

    def to_dict(self) -> dict[str, int]:
        """
        :return: the parameters that were supplied
        """
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}
