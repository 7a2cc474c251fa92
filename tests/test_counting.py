import logging
from decimal import Decimal

import pytest
from sqlalchemy.exc import CompileError, ProgrammingError
from sqlalchemy.orm import joinedload

from jsonapi_utils.counting import RecordCounter, explicit_count
from jsonapi_utils.errors import QueryRejected, RecordCountError
from jsonapi_utils.record_source import MaterializedSource, QueryableSource, wrap_records
from tests.models import Post, Tagging, db


class _ScriptedSource(QueryableSource):
    """
    QueryableSource that rejects the count for the listed clause sets
    """

    table_name = "posts"
    primary_key_name = "id"

    def __init__(self, query=None, clauses=(), rejected=(), calls=None, result=7):
        super().__init__(query)
        self.clauses = clauses
        self.rejected = rejected
        self.calls = [] if calls is None else calls
        self.result = result

    def without_clauses(self, *clauses):
        return _ScriptedSource(self.query, clauses, self.rejected, self.calls, self.result)

    def count_distinct(self):
        self.calls.append(self.clauses)
        error = dict(self.rejected).get(self.clauses)
        if error is not None:
            raise error
        return self.result


def rejected(message: str) -> ProgrammingError:
    return ProgrammingError("SELECT count(DISTINCT posts.id) FROM posts", {}, Exception(message))


@pytest.mark.parametrize("length", [0, 1, 2, 25])
def test_count_materialized_list(length: int) -> None:
    records = [{"id": i} for i in range(length)]
    assert RecordCounter().count(records, {"filter": {"id": "1"}}) == length


def test_count_tuple() -> None:
    assert RecordCounter().count(({"id": 1}, {"id": 2})) == 2


@pytest.mark.parametrize("count", [100, 100.7, "100", Decimal("100")])
def test_explicit_count_wins(count) -> None:
    assert RecordCounter().count([{"id": 1}], {"count": count}) == 100
    assert RecordCounter().count(object(), {"count": count}) == 100


@pytest.mark.parametrize("count", ["many", True, float("nan"), object()])
def test_invalid_explicit_count(count) -> None:
    with pytest.raises(RecordCountError):
        explicit_count({"count": count})


def test_explicit_count_absent() -> None:
    assert explicit_count({}) is None
    assert explicit_count({"count": None}) is None


@pytest.mark.parametrize("records", [{"data": []}, "records", 42, None])
def test_unsupported_record_source(records) -> None:
    with pytest.raises(RecordCountError):
        RecordCounter().count(records)


def test_wrap_records() -> None:
    assert isinstance(wrap_records([]), MaterializedSource)
    source = QueryableSource(None)
    assert wrap_records(source) is source


def test_count_query(seeded) -> None:
    assert RecordCounter().count(Post.query) == 6
    assert RecordCounter().count(db.session.query(Post)) == 6


def test_count_query_skips_join_duplicates(seeded) -> None:
    query = Post.query.join(Post.comments)
    assert len(query.with_entities(Post.id).all()) == 10
    assert RecordCounter().count(query) == 5


def test_count_query_with_eager_loading_and_sorting(seeded) -> None:
    query = Post.query.options(joinedload(Post.comments)).order_by(Post.title.desc())
    assert RecordCounter().count(query) == 6


def test_count_dynamic_relationship(seeded) -> None:
    assert RecordCounter().count(seeded["alice"].posts) == 5
    assert RecordCounter().count(seeded["bob"].posts) == 1


def test_count_composite_primary_key(seeded) -> None:
    assert RecordCounter().count(Tagging.query) == 3


def test_count_query_with_mapping_filter(seeded) -> None:
    assert RecordCounter().count(Post.query, {"filter": {"title": "Post 1,Post 2,Nope"}}) == 2
    assert RecordCounter().count(Post.query, {"filter": {"user_id": [2]}}) == 1


def test_count_query_ignores_invalid_filter_attributes(seeded) -> None:
    assert RecordCounter().count(Post.query, {"filter": {"secret": "x"}}) == 6


def test_count_query_with_callable_filter(seeded) -> None:
    options = {"filter": lambda query: query.filter(Post.user_id == 1)}
    assert RecordCounter().count(Post.query, options) == 5


def test_queryable_source_reflection(app) -> None:
    source = QueryableSource(Post.query)
    assert source.table_name == "posts"
    assert source.primary_key_name == "id"
    assert QueryableSource(Tagging.query).primary_key_name == "post_id,tag"


def test_count_fallback_keeps_includes(caplog: pytest.LogCaptureFixture) -> None:
    source = _ScriptedSource(rejected=[(("includes", "group", "order"), rejected("includes"))])
    with caplog.at_level(logging.WARNING, logger="jsonapi_utils"):
        assert RecordCounter().count(source) == 7
    assert "Count of posts.id rejected, retrying with includes" in caplog.text
    assert source.calls == [("includes", "group", "order"), ("group", "order")]


def test_count_fallback_on_compile_error() -> None:
    source = _ScriptedSource(rejected=[(("includes", "group", "order"), CompileError("no"))], result=3)
    assert RecordCounter().count(source) == 3


def test_count_without_fallback() -> None:
    source = _ScriptedSource()
    assert RecordCounter().count(source) == 7
    assert source.calls == [("includes", "group", "order")]


def test_count_fallback_is_tried_once() -> None:
    second = rejected("group")
    source = _ScriptedSource(rejected=[(("includes", "group", "order"), rejected("includes")), (("group", "order"), second)])
    with pytest.raises(QueryRejected) as exc_info:
        RecordCounter().count(source)
    assert exc_info.value.__cause__ is second
    assert exc_info.value.api_code == "query_rejected"
    assert source.calls == [("includes", "group", "order"), ("group", "order")]


def test_count_other_errors_are_not_retried() -> None:
    source = _ScriptedSource(rejected=[(("includes", "group", "order"), RuntimeError("connection lost"))])
    with pytest.raises(RuntimeError):
        RecordCounter().count(source)
    assert len(source.calls) == 1
