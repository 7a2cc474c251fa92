# flake8: noqa: F401
#
# JSON:API pagination, record counting and request parameter extraction
#
from ._init import JSONAPIUtils, log
from .errors import JsonapiError, RecordCountError, QueryRejected, UnsupportedPaginatorName, RelationshipKeyCollision
from .request import JSONAPIRequest
from .page_params import PageParams
from .paginators import Paginator, PagedPaginator, OffsetPaginator, NonePaginator, PageWindow, page_count, register_paginator, get_paginator_class
from .record_source import RecordSource, QueryableSource, MaterializedSource, wrap_records
from .counting import RecordCounter
from .pagination import Pagination
from .operations import Operation, OperationKind, build_params_for, resource_params, relationship_params
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "JSONAPIUtils",
    "JSONAPIRequest",
    "log",
    # pagination:
    "PageParams",
    "Paginator",
    "PagedPaginator",
    "OffsetPaginator",
    "NonePaginator",
    "PageWindow",
    "page_count",
    "register_paginator",
    "get_paginator_class",
    "Pagination",
    # counting:
    "RecordSource",
    "QueryableSource",
    "MaterializedSource",
    "wrap_records",
    "RecordCounter",
    # request operations:
    "Operation",
    "OperationKind",
    "build_params_for",
    "resource_params",
    "relationship_params",
    # Errors:
    "JsonapiError",
    "RecordCountError",
    "QueryRejected",
    "UnsupportedPaginatorName",
    "RelationshipKeyCollision",
)
