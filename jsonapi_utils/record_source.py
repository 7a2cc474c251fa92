# -*- coding: utf-8 -*-
"""
    record_source.py: the collections we know how to count and paginate

    - QueryableSource: a lazy sqlalchemy query (eg. Model.query or a lazy="dynamic" relationship)
    - MaterializedSource: a list of records that has already been loaded (eg. a list of dicts or an InstrumentedList)
"""
# pylint: disable=logging-format-interpolation
from typing import Any, Callable, Mapping, Optional, Sequence, Union
import sqlalchemy
import sqlalchemy.orm
import sqlalchemy.orm.collections
from sqlalchemy import distinct, func
from sqlalchemy import inspect as sqla_inspect
from sqlalchemy.exc import NoInspectionAvailable
import jsonapi_utils
from .errors import RecordCountError
from .paginators import PageWindow

MATERIALIZED_TYPES = (list, tuple, sqlalchemy.orm.collections.InstrumentedList)

# Clauses that don't affect the number of records, see QueryableSource.without_clauses
INCLUDES = "includes"
GROUP = "group"
ORDER = "order"

FilterContext = Union[Callable[[sqlalchemy.orm.Query], sqlalchemy.orm.Query], Mapping[str, Any]]


class RecordSource:
    """
    Common interface of the record sources
    """

    queryable = False

    def __init__(self, records: Any) -> None:
        self.records = records

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {type(self.records).__name__}>"

    def count(self) -> int:
        raise NotImplementedError

    def apply_window(self, window: PageWindow) -> Any:
        raise NotImplementedError


class MaterializedSource(RecordSource):
    """
    In-memory records, the length is the count
    """

    def __init__(self, records: Sequence[Any]) -> None:
        super().__init__(records)

    def count(self) -> int:
        return len(self.records)

    def apply_window(self, window: PageWindow) -> Sequence[Any]:
        """
        Out of range windows result in a shorter or empty page
        """
        return self.records[window.as_slice()]


class QueryableSource(RecordSource):
    """
    A sqlalchemy orm query, nothing is executed until the records are counted or fetched
    """

    queryable = True

    def __init__(self, query: sqlalchemy.orm.Query) -> None:
        super().__init__(query)

    @property
    def query(self) -> sqlalchemy.orm.Query:
        return self.records

    @property
    def entity(self) -> Any:
        """
        :return: the mapped class of the primary entity of the query
        """
        descriptions = self.query.column_descriptions
        return descriptions[0].get("entity") if descriptions else None

    @property
    def primary_keys(self) -> list:
        entity = self.entity
        try:
            mapper = sqla_inspect(entity)
        except NoInspectionAvailable:
            mapper = None
        if mapper is None or not getattr(mapper, "primary_key", None):
            raise RecordCountError(f"Can't determine the primary key of {entity} to count {self.query}")
        return list(mapper.primary_key)

    @property
    def table_name(self) -> str:
        return self.primary_keys[0].table.name

    @property
    def primary_key_name(self) -> str:
        return ",".join(col.name for col in self.primary_keys)

    def without_clauses(self, *clauses: str) -> "QueryableSource":
        """
        :param clauses: names of the clauses to remove: "includes" (eager loading), "group" and/or "order"
        :return: a new QueryableSource
        """
        query = self.query
        if INCLUDES in clauses:
            query = query.enable_eagerloads(False)
        if GROUP in clauses:
            query = query.group_by(None)
        if ORDER in clauses:
            query = query.order_by(None)
        return self.__class__(query)

    def count_distinct(self) -> int:
        """
        Count the distinct primary keys, joins may yield the same row more than once
        """
        pks = self.primary_keys
        if len(pks) == 1:
            result = self.query.with_entities(func.count(distinct(pks[0]))).scalar()
        else:
            # COUNT(DISTINCT a, b) isn't portable, count the distinct composite keys in a subquery
            result = self.query.with_entities(*pks).distinct().count()
        jsonapi_utils.log.debug(f"Counted {result} {self.table_name} records")
        return int(result or 0)

    def count(self) -> int:
        return self.count_distinct()

    def filter(self, filter_context: Optional[FilterContext]) -> "QueryableSource":
        """
        :param filter_context: callable that filters the query or a {attribute: "csv,values"} mapping
        :return: the filtered QueryableSource
        """
        if not filter_context:
            return self
        if callable(filter_context):
            return self.__class__(filter_context(self.query))

        expressions = []
        for attr_name, val in filter_context.items():
            column = getattr(self.entity, attr_name, None)
            if hasattr(column, "in_"):
                values = val if isinstance(val, (list, tuple, set)) else str(val).split(",")
                expressions.append(column.in_(values))
            else:
                jsonapi_utils.log.warning(f"Invalid filter {attr_name}: '{self.entity}.{attr_name}' is not a column")
        if not expressions:
            return self
        return self.__class__(self.query.filter(*expressions))

    def apply_window(self, window: PageWindow) -> sqlalchemy.orm.Query:
        return self.query.offset(window.offset).limit(window.limit)


def wrap_records(records: Any) -> RecordSource:
    """
    :param records: sqlalchemy query, list of records or RecordSource
    :return: RecordSource
    """
    if isinstance(records, RecordSource):
        return records
    if isinstance(records, sqlalchemy.orm.Query):
        return QueryableSource(records)
    if isinstance(records, MATERIALIZED_TYPES):
        return MaterializedSource(records)
    raise RecordCountError(f"Can't count records of type {type(records).__name__}")
