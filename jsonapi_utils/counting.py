#
# Record counting, used for the pagination links and the "record_count" meta member
#
# Counting may take > 1s for a table with millions of records, depending on the storage engine,
# so callers that already know the count can pass it with the "count" option.
#
import numbers
from typing import Any, Mapping, Optional
import sqlalchemy.exc
import jsonapi_utils
from .errors import RecordCountError, QueryRejected
from .record_source import GROUP, INCLUDES, ORDER, QueryableSource, wrap_records

# Errors raised when the database (or the sqla compiler) rejects a count query
STATEMENT_INVALID = (sqlalchemy.exc.StatementError, sqlalchemy.exc.CompileError)


def explicit_count(options: Mapping[str, Any]) -> Optional[int]:
    """
    :param options: pagination options, eg. {"count": 100}
    :return: the "count" option as an int, None if no count was given
    """
    count = options.get("count") if options else None
    if count is None:
        return None
    if isinstance(count, bool):
        raise RecordCountError(f"Invalid count {count!r}")
    if isinstance(count, numbers.Number):
        try:
            return int(count)
        except (TypeError, ValueError, OverflowError):
            raise RecordCountError(f"Invalid count {count!r}")
    if isinstance(count, str):
        try:
            return int(count.strip())
        except ValueError:
            raise RecordCountError(f"Invalid count {count!r}")
    raise RecordCountError(f"Invalid count type {type(count).__name__}")


class RecordCounter:
    """
    Count the records of a query or a list
    """

    def count(self, records: Any, options: Optional[Mapping[str, Any]] = None) -> int:
        """
        :param records: sqlalchemy query, list of records or RecordSource
        :param options: {"count": explicit count, "filter": filter applied before counting a query}
        :return: number of records
        """
        options = options or {}
        result = explicit_count(options)
        if result is not None:
            return result

        source = wrap_records(records)
        if source.queryable:
            return self.count_from_database(source, options)
        return source.count()

    def count_from_database(self, source: QueryableSource, options: Mapping[str, Any]) -> int:
        """
        Count the records applying the request filter and skipping eager loading, grouping and sorting.
        Some databases reject the count when the eager loading is removed together with the
        grouping and sorting, in that case we retry once with the eager loading in place.
        """
        filter_context = options.get("filter")
        if filter_context:
            source = source.filter(filter_context)

        try:
            return source.without_clauses(INCLUDES, GROUP, ORDER).count_distinct()
        except STATEMENT_INVALID as exc:
            jsonapi_utils.log.warning(f"Count of {source.table_name}.{source.primary_key_name} rejected, retrying with includes ({exc})")

        try:
            return source.without_clauses(GROUP, ORDER).count_distinct()
        except STATEMENT_INVALID as exc:
            raise QueryRejected(f"Can't count {source.table_name} records: {exc}") from exc
