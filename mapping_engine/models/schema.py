"""Schema models: columns, schemas and the system-field taxonomy."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from mapping_engine.exceptions import InvalidSchemaError


class SystemFieldCategory(str, Enum):
    """Closed taxonomy of platform housekeeping fields."""
    NONE = "none"
    CREATED_ON = "created-on"
    CREATED_BY = "created-by"
    MODIFIED_ON = "modified-on"
    MODIFIED_BY = "modified-by"
    OWNER = "owner"
    BUSINESS_UNIT = "business-unit"
    STATE = "state"
    STATUS = "status"
    VERSION = "version"
    IMPORT_SEQUENCE = "import-sequence"
    OVERRIDDEN_CREATED_ON = "overridden-created-on"
    TIME_ZONE_RULE = "time-zone-rule"
    UTC_CONVERSION_TIME_ZONE = "utc-conversion-time-zone"
    OTHER = "other"


class SchemaOrigin(str, Enum):
    """Where a schema came from; also tells source side from target side."""
    PARSED_SCRIPT = "parsed-script"  # CREATE TABLE script
    DATABASE = "database"  # live relational introspection
    PLATFORM_EXPORT = "platform-export"  # business-platform metadata export
    PLATFORM_LIVE = "platform-live"  # business-platform metadata query

    @property
    def is_source(self) -> bool:
        return self in (SchemaOrigin.PARSED_SCRIPT, SchemaOrigin.DATABASE)


@dataclass(frozen=True)
class Column:
    """One attribute of a schema.

    ``is_system_field`` is ``None`` until the column has been classified; source
    columns usually stay unclassified.
    """

    name: str
    data_type: str
    is_nullable: bool = True
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    is_identity: bool = False
    is_computed: bool = False
    default_definition: Optional[str] = None
    is_primary_id: bool = False
    is_primary_name: bool = False
    is_required: bool = False
    option_set_values: Optional[Tuple[str, ...]] = None
    is_system_field: Optional[bool] = None
    system_field_category: SystemFieldCategory = SystemFieldCategory.NONE

    def __post_init__(self):
        if self.option_set_values is not None and not isinstance(self.option_set_values, tuple):
            object.__setattr__(self, "option_set_values", tuple(self.option_set_values))

    @property
    def is_classified(self) -> bool:
        return self.is_system_field is not None

    def with_classification(
        self, is_system_field: bool, category: SystemFieldCategory
    ) -> "Column":
        """Return a copy carrying the given classification."""
        return replace(self, is_system_field=is_system_field, system_field_category=category)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "data_type": self.data_type,
            "is_nullable": self.is_nullable,
            "length": self.length,
            "precision": self.precision,
            "scale": self.scale,
            "is_identity": self.is_identity,
            "is_computed": self.is_computed,
            "default_definition": self.default_definition,
            "is_primary_id": self.is_primary_id,
            "is_primary_name": self.is_primary_name,
            "is_required": self.is_required,
            "option_set_values": list(self.option_set_values) if self.option_set_values is not None else None,
            "is_system_field": self.is_system_field,
            "system_field_category": self.system_field_category.value,
        }


@dataclass(frozen=True)
class Schema:
    """A named, ordered collection of columns with case-insensitively unique names."""

    name: str
    origin: SchemaOrigin
    columns: Tuple[Column, ...] = ()
    _index: Dict[str, Column] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.columns, tuple):
            object.__setattr__(self, "columns", tuple(self.columns))

        index: Dict[str, Column] = {}
        for column in self.columns:
            if not column.name or not column.name.strip():
                raise InvalidSchemaError(f"Schema '{self.name}' contains a column with a blank name")
            key = column.name.casefold()
            if key in index:
                raise InvalidSchemaError(
                    f"Schema '{self.name}' has duplicate column name '{column.name}' "
                    f"(conflicts with '{index[key].name}')"
                )
            index[key] = column
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]

    def find_column(self, name: Optional[str]) -> Optional[Column]:
        """Case-insensitive lookup; returns None when the name is unknown."""
        if not name:
            return None
        return self._index.get(name.strip().casefold())

    def custom_columns(self) -> List[Column]:
        return [col for col in self.columns if col.is_system_field is not True]

    def system_columns(self) -> List[Column]:
        return [col for col in self.columns if col.is_system_field is True]

    def with_columns(self, columns) -> "Schema":
        """Return a copy of this schema holding ``columns`` instead."""
        return Schema(name=self.name, origin=self.origin, columns=tuple(columns))

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "origin": self.origin.value,
            "columns": [col.to_dict() for col in self.columns],
        }
