# fastapi_column_sortable/relations.py

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import RelationshipDirection, RelationshipProperty

from .exceptions import InvalidRelation, UnsupportedRelationKind


class RelationKind(str, Enum):
    HAS_ONE = "has_one"
    BELONGS_TO = "belongs_to"


@dataclass(frozen=True)
class RelationDescriptor:
    """A one-to-one relationship reduced to the keys needed for a join.

    For ``HAS_ONE`` the related table holds ``foreign_key`` pointing at the
    parent's ``parent_key``. For ``BELONGS_TO`` the parent holds
    ``foreign_key`` pointing at the related ``owner_key``.
    """

    name: str
    kind: RelationKind
    parent: Any
    related: Any
    foreign_key: str
    owner_key: Optional[str] = None
    parent_key: Optional[str] = None


def relation_kind(prop: RelationshipProperty) -> Optional[RelationKind]:
    if prop.secondary is not None:
        return None
    if prop.direction is RelationshipDirection.MANYTOONE:
        return RelationKind.BELONGS_TO
    if prop.direction is RelationshipDirection.ONETOMANY and not prop.uselist:
        return RelationKind.HAS_ONE
    return None


def describe_relation(model, relation_name: str) -> RelationDescriptor:
    try:
        prop = sa_inspect(model).relationships[relation_name]
    except (KeyError, NoInspectionAvailable) as e:
        raise InvalidRelation(relation_name, e) from e

    kind = relation_kind(prop)
    if kind is None:
        raise UnsupportedRelationKind(relation_name)

    # single column keys only
    if len(prop.local_remote_pairs) != 1:
        raise UnsupportedRelationKind(relation_name)

    local, remote = prop.local_remote_pairs[0]
    related = prop.mapper.class_

    if kind is RelationKind.BELONGS_TO:
        return RelationDescriptor(relation_name, kind, model, related,
                                  foreign_key=local.name, owner_key=remote.name)
    return RelationDescriptor(relation_name, kind, model, related,
                              foreign_key=remote.name, parent_key=local.name)


# (parent side column, related side column) per relation kind
JOIN_KEYS = {
    RelationKind.HAS_ONE: lambda relation: (relation.parent_key, relation.foreign_key),
    RelationKind.BELONGS_TO: lambda relation: (relation.foreign_key, relation.owner_key),
}
