"""System field classification and mapping priority."""

import logging
from typing import Optional, Tuple

from mapping_engine.classification.system_fields import (
    CUSTOM_FIELD_PRIORITY,
    SYSTEM_FIELD_NAMES,
    SYSTEM_FIELD_PREFIXES,
    SYSTEM_FIELD_PRIORITIES,
)
from mapping_engine.models.schema import Column, Schema, SystemFieldCategory

logger = logging.getLogger(__name__)


class SystemFieldClassifier:
    """Tags target columns as custom or system fields and ranks them for resolution.

    Pure and stateless; one instance can be shared across resolution runs.
    """

    def classify_field(
        self, logical_name: str, data_type: Optional[str] = None
    ) -> Tuple[bool, SystemFieldCategory]:
        """
        Classify a column by its logical name.

        Args:
            logical_name: Column logical name
            data_type: Declared type (not used by the default policy)

        Returns:
            Tuple of (is_system_field, category)
        """
        if not logical_name or not logical_name.strip():
            return False, SystemFieldCategory.NONE

        key = logical_name.strip().lower()

        category = SYSTEM_FIELD_NAMES.get(key)
        if category is not None:
            return True, category

        if key.startswith(SYSTEM_FIELD_PREFIXES):
            return True, SystemFieldCategory.OTHER

        return False, SystemFieldCategory.NONE

    def get_mapping_priority(self, column: Column) -> int:
        """
        Get priority for mapping - lower numbers get mapped first.

        Custom fields: 1, system fields: 2-10 by category.

        Args:
            column: Column with classification attached

        Returns:
            Priority rank
        """
        if not column.is_system_field:
            return CUSTOM_FIELD_PRIORITY
        return SYSTEM_FIELD_PRIORITIES[column.system_field_category]

    def classify_column(self, column: Column) -> Column:
        """Attach a classification to ``column`` unless ingestion already did."""
        if column.is_classified:
            return column
        is_system, category = self.classify_field(column.name, column.data_type)
        return column.with_classification(is_system, category)

    def classify_schema(self, schema: Schema) -> Schema:
        """Return ``schema`` with every unclassified column classified."""
        if all(col.is_classified for col in schema.columns):
            return schema

        classified = [self.classify_column(col) for col in schema.columns]
        system_count = sum(1 for col in classified if col.is_system_field)
        logger.debug(
            f"Classified schema '{schema.name}': {len(classified) - system_count} custom, "
            f"{system_count} system columns"
        )
        return schema.with_columns(classified)
