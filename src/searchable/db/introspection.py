"""Schema introspection used when an entity has no searchable column configuration."""

from sqlalchemy import Table, inspect
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from searchable.core.exceptions import SchemaIntrospectionError


class SchemaIntrospector:
    """Lists the columns of a table.

    With a bind the live database schema is read through the SQLAlchemy
    inspector; without one the declared ``Table`` columns are used.

    Attributes:
        bind: Synchronous engine or connection (optional)
    """

    def __init__(self, bind: Engine | Connection | None = None):
        self.bind = bind

    def list_columns(self, table: Table) -> list[str]:
        """Return the column names of a table in schema order.

        Raises:
            SchemaIntrospectionError: If the schema cannot be read or the
                table has no columns
        """
        if self.bind is None:
            columns = [column.name for column in table.columns]
        else:
            try:
                reflected = inspect(self.bind).get_columns(table.name, schema=table.schema)
            except SQLAlchemyError as exc:
                raise SchemaIntrospectionError(table.name) from exc
            columns = [column["name"] for column in reflected]

        if not columns:
            raise SchemaIntrospectionError(table.name, columns)
        return columns
