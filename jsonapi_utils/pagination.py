#
# Pagination of jsonapi collections (http://jsonapi.org/format/#fetching-pagination)
#
# A Pagination instance lives for a single request: the paginator, the window and
# the record count are computed once and reused for the data, the links and the meta member.
#
#   pagination = Pagination.from_request()
#   options = {"resource": PostResource, "count": None}
#   data = pagination.apply_pagination(Post.query, options)
#   links = pagination.pagination_links(Post.query, options)
#   meta = pagination.pagination_meta(Post.query, options)
#
# pylint: disable=logging-format-interpolation
from typing import Any, Dict, Mapping, Optional, Union
from flask import has_request_context, request
import jsonapi_utils
from .config import get_config
from .counting import RecordCounter
from .page_params import PAGE_ARG_RE, PageParams
from .paginators import PageWindow, Paginator, get_paginator_class, page_count
from .record_source import wrap_records

NONE_PAGINATOR = "none"
_UNSET = object()


class Pagination:
    """
    Decides whether and how a collection is paginated, counts the records and builds the links
    """

    def __init__(
        self,
        page_params: Union[PageParams, Mapping[str, Any], None] = None,
        paginator_name: Optional[str] = None,
        resource: Any = None,
        default_page_size: Optional[int] = None,
    ) -> None:
        """
        :param page_params: PageParams or a raw mapping, eg. {"number": "2", "size": "10"}
        :param paginator_name: overrides the paginator declared by the resource
        :param resource: resource descriptor with a `paginator` attribute (or key)
        :param default_page_size: overrides the DEFAULT_PAGE_SIZE configuration
        """
        if not isinstance(page_params, PageParams):
            page_params = PageParams.normalize(page_params)
        self.page_params = page_params
        self.resource = resource
        self.default_page_size = default_page_size
        self.counter = RecordCounter()
        self._paginator_name = paginator_name
        self._paginator = None
        self._window = _UNSET
        self._record_count = None

    @classmethod
    def from_request(cls, req: Any = None, **kwargs) -> "Pagination":
        """
        :param req: request with the page[] query arguments, defaults to the current flask request
        :return: Pagination for the request
        """
        if req is None:
            req = request
        page_params = getattr(req, "page_params", None)
        if not isinstance(page_params, PageParams):
            page_params = PageParams.from_args(req.args)
        return cls(page_params, **kwargs)

    def resource_paginator_name(self, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        :return: the paginator name: explicitly set, declared by the resource or the configured default
        """
        if self._paginator_name is None:
            options = options or {}
            name = options.get("paginator")
            resource = options.get("resource", self.resource)
            if name is None and resource is not None:
                if isinstance(resource, Mapping):
                    name = resource.get("paginator")
                else:
                    name = getattr(resource, "paginator", None)
            if name is None:
                name = get_config("DEFAULT_PAGINATOR")
            self._paginator_name = str(name).lstrip(":")
        return self._paginator_name

    def paginator(self, options: Optional[Mapping[str, Any]] = None) -> Paginator:
        if self._paginator is None:
            paginator_cls = get_paginator_class(self.resource_paginator_name(options))
            self._paginator = paginator_cls(self.page_params, default_page_size=self.default_page_size)
        return self._paginator

    def should_paginate(self, options: Optional[Mapping[str, Any]] = None) -> bool:
        """
        :return: whether the records should be paginated
        """
        options = options or {}
        return self.resource_paginator_name(options) != NONE_PAGINATOR and options.get("paginate") is not False

    def apply_pagination(self, records: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        :param records: sqlalchemy query or list of records
        :param options: {"resource": .., "count": .., "paginate": .., "filter": ..}
        :return: the records of the current page, a query is returned unexecuted
        """
        options = options or {}
        if not self.should_paginate(options):
            return records
        source = wrap_records(records)
        window = self.pagination_window(records, options)
        if window is None:
            return records
        jsonapi_utils.log.debug(f"Paginating {source} with {self.paginator(options)}: {window}")
        return source.apply_window(window)

    def pagination_window(self, records: Any, options: Optional[Mapping[str, Any]] = None) -> Optional[PageWindow]:
        if self._window is _UNSET:
            self._window = self.paginator(options).window(self.record_count_for(records, options))
        return self._window

    def record_count_for(self, records: Any, options: Optional[Mapping[str, Any]] = None) -> int:
        """
        :return: the (memoized) number of records
        """
        if self._record_count is None:
            self._record_count = self.counter.count(records, options or {})
        return self._record_count

    def page_count_for(self, record_count: int) -> int:
        """
        :return: number of pages, sized by page[size] or page[limit] whatever the paginator
        """
        paginator = self.paginator()
        size = self.page_params.size or self.page_params.limit or paginator.default_page_size
        return page_count(record_count, paginator.clamp_page_size(size, "size"))

    def pagination_params(self, records: Any, options: Optional[Mapping[str, Any]] = None) -> Dict[str, Dict[str, int]]:
        """
        :return: page parameters for the links, eg.
            {"first": {"number": 1, "size": 2}, "next": {"number": 2, "size": 2}, "last": {"number": 2, "size": 2}}
        """
        if not get_config("TOP_LEVEL_LINKS_INCLUDE_PAGINATION"):
            return {}
        return self.paginator(options).links_for(self.record_count_for(records, options))

    def pagination_links(self, records: Any, options: Optional[Mapping[str, Any]] = None, base_url: Optional[str] = None) -> Dict[str, str]:
        """
        :param base_url: url of the collection, defaults to the url of the current request
        :return: pagination links, the other query arguments of the current request are kept
        """
        other_args = []
        if has_request_context():
            if base_url is None:
                base_url = request.base_url
            other_args = [f"{k}={v}" for k, v in request.args.items() if not PAGE_ARG_RE.search(k)]

        def get_link(page):
            page_args = [f"page[{k}]={v}" for k, v in page.items()]
            return (base_url or "") + "?" + "&".join(other_args + page_args)

        return {name: get_link(page) for name, page in self.pagination_params(records, options).items()}

    def pagination_meta(self, records: Any, options: Optional[Mapping[str, Any]] = None) -> Dict[str, int]:
        """
        :return: the "meta" member counts, eg. {"record_count": 42, "page_count": 5}
        """
        meta = {}
        if get_config("TOP_LEVEL_META_INCLUDE_RECORD_COUNT"):
            meta[get_config("TOP_LEVEL_META_RECORD_COUNT_KEY")] = self.record_count_for(records, options)
        if get_config("TOP_LEVEL_META_INCLUDE_PAGE_COUNT"):
            record_count = self.record_count_for(records, options)
            meta[get_config("TOP_LEVEL_META_PAGE_COUNT_KEY")] = self.page_count_for(record_count)
        return meta
