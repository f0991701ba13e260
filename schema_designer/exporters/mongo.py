"""MongoDB collection definition emitter."""

import json
from typing import Any, Dict, List, Optional, Sequence

from ..schema.models import Table, Column
from ..schema.type_mappers import TypeMapper
from ..schema.types import parse_type_token
from .base import Emitter


class MongoEmitter(Emitter):
    """Generates a mongo shell script of createCollection calls.

    Each table becomes a collection with a $jsonSchema validator. Foreign
    keys are recorded as field descriptions only since MongoDB does not
    enforce references. Primary keys and unique columns become unique
    indexes. Defaults and storage-engine hints have no equivalent.
    """

    def emit(self, tables: Sequence[Table], type_mapper: TypeMapper) -> str:
        statements: List[str] = []
        for table in tables:
            statements.append(self.create_collection(table, type_mapper))
            statements.extend(self.create_indexes(table))
        return self.join_statements(statements)

    def _js(self, value: Any, indent: bool = False) -> str:
        # JSON is a subset of JavaScript object literal syntax
        return json.dumps(value, indent=2 if indent else None, ensure_ascii=False)

    def _collection(self, table: Table) -> str:
        return f"db.getCollection({self._js(table.name)})"

    def create_collection(self, table: Table, type_mapper: TypeMapper) -> str:
        references = {
            fk.column: f"references {fk.references.table}.{fk.references.column}"
            for fk in table.foreign_keys
        }

        required: List[str] = []
        properties: Dict[str, Any] = {}
        for column in table.columns:
            if column.not_null or column.primary_key:
                required.append(column.name)
            properties[column.name] = self.field_schema(
                table, column, type_mapper, references.get(column.name)
            )

        json_schema: Dict[str, Any] = {"bsonType": "object", "title": table.name}
        if required:
            json_schema["required"] = required
        json_schema["properties"] = properties

        options = {"validator": {"$jsonSchema": json_schema}}
        return f"db.createCollection({self._js(table.name)}, {self._js(options, indent=True)});"

    def field_schema(
        self,
        table: Table,
        column: Column,
        type_mapper: TypeMapper,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build the $jsonSchema property for one column."""
        bson_type = type_mapper.map_type(column, table.name)
        spec = parse_type_token(column.type)
        nullable = not (column.not_null or column.primary_key)

        field: Dict[str, Any] = {"bsonType": [bson_type, "null"] if nullable else bson_type}
        if spec.base == "set":
            field["items"] = {"enum": list(column.enum_values or [])}
            field["uniqueItems"] = True
        elif spec.is_enum:
            values: List[Any] = list(column.enum_values or [])
            if nullable:
                values.append(None)
            field["enum"] = values

        max_length = spec.single_int_param()
        if spec.is_text and max_length is not None:
            field["maxLength"] = max_length
        if description:
            field["description"] = description
        return field

    def create_indexes(self, table: Table) -> List[str]:
        statements = []
        primary_keys = [c.name for c in table.primary_key_columns()]
        # _id is always uniquely indexed
        if primary_keys and primary_keys != ["_id"]:
            keys = {name: 1 for name in primary_keys}
            statements.append(
                f"{self._collection(table)}.createIndex({self._js(keys)}, {self._js({'unique': True})});"
            )
        for column in table.columns:
            if not column.unique or [column.name] == primary_keys or column.name == "_id":
                continue
            statements.append(
                f"{self._collection(table)}.createIndex({self._js({column.name: 1})}, {self._js({'unique': True})});"
            )
        return statements
