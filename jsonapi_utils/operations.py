"""Request operations.

A parsed JSON:API write request yields an ordered list of operations. Resource
operations (create/replace) carry the full resource payload:

    {"attributes": {"title": "Lorem"}, "to_one": {"author": 1}, "to_many": {"tags": {2, 3}}}

while relationship operations only carry linkage or meta information. The helpers
below find the resource payload and return the parameters that are assigned to the
model instance, eg.

    post = Post(**resource_params(operations), author_id=relationship_params(operations)["author"])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional
import jsonapi_utils
from .errors import RelationshipKeyCollision

ATTRIBUTES = "attributes"
TO_ONE = "to_one"
TO_MANY = "to_many"
RELATIONSHIPS = "relationships"
FULL_PAYLOAD_KEYS = (ATTRIBUTES, TO_ONE, TO_MANY)


class OperationKind(str, Enum):
    CREATE_RESOURCE = "create_resource"
    REPLACE_FIELDS = "replace_fields"
    REMOVE_RESOURCE = "remove_resource"
    REPLACE_TO_ONE_RELATIONSHIP = "replace_to_one_relationship"
    CREATE_TO_MANY_RELATIONSHIPS = "create_to_many_relationships"
    REPLACE_TO_MANY_RELATIONSHIPS = "replace_to_many_relationships"
    REMOVE_TO_MANY_RELATIONSHIPS = "remove_to_many_relationships"


@dataclass(frozen=True)
class Operation:
    kind: OperationKind
    data: Mapping[str, Any] = field(default_factory=dict)


def operation_data(operation: Any) -> Optional[Mapping[str, Any]]:
    """
    :param operation: Operation, or a mapping/object with a "data" payload
    :return: the payload of the operation
    """
    if isinstance(operation, Mapping):
        data = operation.get("data")
    else:
        data = getattr(operation, "data", None)
    return data if isinstance(data, Mapping) else None


def has_full_payload(operation: Any) -> bool:
    data = operation_data(operation)
    return data is not None and all(key in data for key in FULL_PAYLOAD_KEYS)


def build_params_for(operations: Iterable[Any], param_type: str) -> Mapping[str, Any]:
    """
    :param operations: parsed request operations
    :param param_type: "attributes" or "relationships"
    :return: the attributes, or the merged to-one and to-many relationships, of the
        first operation carrying a full resource payload. {} when there's no such operation
    """
    operation = next((op for op in operations or () if has_full_payload(op)), None)
    if operation is None:
        return {}

    data = operation_data(operation)
    if param_type != RELATIONSHIPS:
        return data[ATTRIBUTES] if data[ATTRIBUTES] is not None else {}

    to_one = data[TO_ONE] or {}
    to_many = data[TO_MANY] or {}
    collisions = set(to_one) & set(to_many)
    if collisions:
        raise RelationshipKeyCollision(f"{', '.join(sorted(map(str, collisions)))} in both to-one and to-many relationships")
    result = dict(to_one)
    result.update(to_many)
    jsonapi_utils.log.debug(f"Relationship params of {getattr(operation, 'kind', None)}: {sorted(result)}")
    return result


def resource_params(operations: Iterable[Any]) -> Mapping[str, Any]:
    return build_params_for(operations, ATTRIBUTES)


def relationship_params(operations: Iterable[Any]) -> Mapping[str, Any]:
    return build_params_for(operations, RELATIONSHIPS)
