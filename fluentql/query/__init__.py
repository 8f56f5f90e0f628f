"""fluentql query layer: raw queries and fluent statement builders."""
from fluentql.query.base import Query, QueryType
from fluentql.query.builder import Builder
from fluentql.query.delete import Delete
from fluentql.query.insert import Insert
from fluentql.query.join import Join
from fluentql.query.select import Select
from fluentql.query.update import Update

__all__ = [
    "Builder",
    "Delete",
    "Insert",
    "Join",
    "Query",
    "QueryType",
    "Select",
    "Update",
]
