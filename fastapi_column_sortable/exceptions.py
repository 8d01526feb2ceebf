# fastapi_column_sortable/exceptions.py

from typing import Optional


class ColumnSortableException(Exception):
    """Raised when a sortable declaration cannot be turned into a query.

    ``code`` tells the failure apart: 0 for a malformed sort argument,
    1 for a relation missing on the model and 2 for a relation that is
    neither has-one nor belongs-to.
    """

    INVALID_ARGUMENT = 0
    INVALID_RELATION = 1
    UNSUPPORTED_RELATION = 2

    MESSAGES = {
        INVALID_ARGUMENT: "Invalid sort argument '{}'.",
        INVALID_RELATION: "Relation '{}' does not exist.",
        UNSUPPORTED_RELATION: "Relation '{}' is not a one-to-one (has-one or belongs-to) relation.",
    }

    def __init__(self, argument: str, code: int = INVALID_ARGUMENT, cause: Optional[BaseException] = None):
        self.argument = argument
        self.code = code
        self.cause = cause
        super().__init__(self.MESSAGES.get(code, "Column sorting failed for '{}'.").format(argument))


class InvalidSortArgument(ColumnSortableException):
    def __init__(self, argument: str, cause: Optional[BaseException] = None):
        super().__init__(argument, self.INVALID_ARGUMENT, cause)


class InvalidRelation(ColumnSortableException):
    def __init__(self, relation_name: str, cause: Optional[BaseException] = None):
        super().__init__(relation_name, self.INVALID_RELATION, cause)


class UnsupportedRelationKind(ColumnSortableException):
    def __init__(self, relation_name: str, cause: Optional[BaseException] = None):
        super().__init__(relation_name, self.UNSUPPORTED_RELATION, cause)
