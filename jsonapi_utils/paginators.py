#
# Pagination strategies (http://jsonapi.org/format/#fetching-pagination)
#
# A paginator maps the page parameters to
# - a window: the (inclusive) index range of the requested page
# - pagination links: the page parameters of the first, prev, next and last pages
#
# Resources refer to their paginator by name ("paged", "offset", "none" or a
# custom name), the name is resolved with get_paginator_class().
# Custom strategies subclass Paginator and register themselves:
#
#   @register_paginator("cursorish")
#   class MyPaginator(Paginator):
#       ...
#
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type
import jsonapi_utils
from .config import get_config, get_int_config
from .errors import UnsupportedPaginatorName
from .page_params import PageParams

PAGINATORS: Dict[str, Type["Paginator"]] = {}


@dataclass(frozen=True)
class PageWindow:
    """
    Zero-based, inclusive index range of a page
    """

    start: int
    end: int

    @property
    def offset(self) -> int:
        return self.start

    @property
    def limit(self) -> int:
        return max(self.end - self.start + 1, 0)

    def as_slice(self) -> slice:
        return slice(self.start, self.end + 1)


def page_count(record_count: int, size: int) -> int:
    """
    :param record_count: total number of records
    :param size: page size
    :return: number of pages, 0 if there are no records
    """
    if record_count is None or record_count < 1:
        return 0
    return (int(record_count) + size - 1) // size


def register_paginator(name: str) -> Callable[[Type["Paginator"]], Type["Paginator"]]:
    """
    Class decorator that makes a paginator available under `name`
    """

    def decorator(paginator_cls: Type["Paginator"]) -> Type["Paginator"]:
        paginator_cls.name = name
        PAGINATORS[name] = paginator_cls
        return paginator_cls

    return decorator


def get_paginator_class(name: Any) -> Type["Paginator"]:
    """
    :param name: paginator name, eg. "paged" or "offset"
    :return: the registered Paginator subclass
    """
    paginator_cls = PAGINATORS.get(str(name).lstrip(":")) if name is not None else None
    if paginator_cls is None:
        raise UnsupportedPaginatorName(f"{name!r} (registered: {', '.join(sorted(PAGINATORS))})")
    return paginator_cls


class Paginator:
    """
    Base class of the pagination strategies
    """

    name: Optional[str] = None

    def __init__(self, page_params: PageParams, default_page_size: Optional[int] = None, max_page_size: Optional[int] = None) -> None:
        self.page_params = page_params
        self.default_page_size = int(default_page_size) if default_page_size else get_int_config("DEFAULT_PAGE_SIZE")
        if max_page_size is None:
            max_page_size = get_config("MAX_PAGE_SIZE")
        self.max_page_size = int(max_page_size) if max_page_size else None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.page_params.to_dict()}>"

    def window(self, record_count: Optional[int] = None) -> Optional[PageWindow]:
        """
        :param record_count: total number of records
        :return: the window of the current page, None when no window should be applied
        """
        raise NotImplementedError

    def links_for(self, record_count: int) -> Dict[str, Dict[str, int]]:
        """
        :param record_count: total number of records
        :return: page parameters of the pagination links
        """
        raise NotImplementedError

    def clamp_page_size(self, size: int, param: str) -> int:
        if self.max_page_size and size > self.max_page_size:
            jsonapi_utils.log.warning(f"page[{param}]={size} exceeds the maximum page size, using {self.max_page_size}")
            return self.max_page_size
        return size


@register_paginator("paged")
class PagedPaginator(Paginator):
    """
    page[number] and page[size] pagination, page numbers start at 1
    """

    def __init__(self, page_params: PageParams, *args, **kwargs) -> None:
        super().__init__(page_params, *args, **kwargs)
        self.number = page_params.number_or_first()
        self.size = self.clamp_page_size(page_params.size_or_default(self.default_page_size), "size")

    def window(self, record_count: Optional[int] = None) -> PageWindow:
        return PageWindow((self.number - 1) * self.size, self.number * self.size - 1)

    def links_for(self, record_count: int) -> Dict[str, Dict[str, int]]:
        last_number = max(page_count(record_count, self.size), 1)
        links = {"first": {"number": 1, "size": self.size}}
        if self.number > 1:
            links["prev"] = {"number": self.number - 1, "size": self.size}
        if self.number < last_number:
            links["next"] = {"number": self.number + 1, "size": self.size}
        links["last"] = {"number": last_number, "size": self.size}
        return links


@register_paginator("offset")
class OffsetPaginator(Paginator):
    """
    page[offset] and page[limit] pagination, offset is the number of records to skip
    """

    def __init__(self, page_params: PageParams, *args, **kwargs) -> None:
        super().__init__(page_params, *args, **kwargs)
        self.offset = page_params.offset_or_zero()
        self.limit = self.clamp_page_size(page_params.limit_or_default(self.default_page_size), "limit")

    def window(self, record_count: Optional[int] = None) -> PageWindow:
        return PageWindow(self.offset, self.offset + self.limit - 1)

    def links_for(self, record_count: int) -> Dict[str, Dict[str, int]]:
        record_count = record_count or 0
        links = {"first": {"offset": 0, "limit": self.limit}}
        if self.offset > 0:
            links["prev"] = {"offset": max(self.offset - self.limit, 0), "limit": self.limit}
        if self.offset + self.limit < record_count:
            links["next"] = {"offset": self.offset + self.limit, "limit": self.limit}
        links["last"] = {"offset": max(record_count - self.limit, 0), "limit": self.limit}
        return links


@register_paginator("none")
class NonePaginator(Paginator):
    """
    No pagination: the whole collection is returned
    """

    def window(self, record_count: Optional[int] = None) -> None:
        return None

    def links_for(self, record_count: int) -> Dict[str, Dict[str, int]]:
        return {}
