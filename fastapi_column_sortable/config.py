# fastapi_column_sortable/config.py

from enum import Enum
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class JoinType(str, Enum):
    LEFT = "left"
    INNER = "inner"
    RIGHT = "right"


LEGACY_JOIN_TYPES = {
    "leftJoin": JoinType.LEFT,
    "join": JoinType.INNER,
    "innerJoin": JoinType.INNER,
    "rightJoin": JoinType.RIGHT,
}


class SortableSettings(BaseSettings):
    allow_request_modification: bool = True
    default_first_column: bool = False
    default_direction: Literal["asc", "desc"] = "asc"
    join_type: JoinType = JoinType.LEFT
    relation_column_separator: str = "|"

    model_config = SettingsConfigDict(
        env_prefix="COLUMNSORTABLE_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("default_direction", mode="before")
    @classmethod
    def _lower_direction(cls, value):
        return value.lower() if isinstance(value, str) else value

    @field_validator("join_type", mode="before")
    @classmethod
    def _legacy_join_type(cls, value):
        return LEGACY_JOIN_TYPES.get(value, value)

    @field_validator("relation_column_separator")
    @classmethod
    def _single_symbol(cls, value: str) -> str:
        if len(value) != 1 or value.isalnum():
            raise ValueError("separator must be a single non-alphanumeric character")
        return value


sortable_settings = SortableSettings()
