"""Prompt and request payload for the remote similarity service."""

from typing import Any, Dict, List, Optional, Set

from mapping_engine.constants import (
    REASONING_MODEL_MAX_COMPLETION_TOKENS,
    STANDARD_MODEL_MAX_TOKENS,
)
from mapping_engine.models.schema import Column, Schema


SYSTEM_PROMPT = """
You are a data mapping specialist. Map the columns of a relational source table to the attributes of a business-platform entity.

1. SOURCE COLUMNS:
   - Read each column's name, data type and constraints
   - Work out its business purpose (identifier, name, description, date, amount, ...)
   - Note primary keys and audit columns

2. TARGET COLUMNS:
   - customTargetColumns: business attributes, map these first
   - systemTargetColumns: platform housekeeping attributes, map these after custom ones
   - Note required attributes, primary id / primary name and data types

3. STRATEGY:
   - Custom attribute matches: confidence 0.7-0.95
   - System attribute matches by naming pattern: confidence 0.6-0.85
   - Exact name matches score highest, then semantic matches
   - Data types must be compatible

4. SYSTEM ATTRIBUTE PATTERNS:
   - created*/date_created -> createdon
   - created_by/creator -> createdby
   - modified*/last_modified -> modifiedon
   - modified_by/updater -> modifiedby
   - owner*/assigned_to -> ownerid
   - status/state/active -> statecode/statuscode

5. CONFIDENCE:
   - 0.90-0.95: exact name match, compatible type
   - 0.80-0.89: strong semantic match (customer_name -> name)
   - 0.70-0.79: good business-logic match
   - 0.60-0.69: system attribute pattern match
   - 0.50-0.59: reasonable inference
   - below 0.50: leave it out

Return ONLY a JSON array in exactly this format:
[{"source":"<sourceColumn>","target":"<targetAttribute>","confidence":0.0-1.0,"transformation":"<optional>","rationale":"<reasoning>"}]

Rules:
- Never use the same target twice
- One-to-one mappings only
- Add a transformation when the data needs converting
- Give a short rationale for every mapping
- No markdown and no text outside the JSON array
""".strip()


# Naming guidance per system-field category sent with every request
SYSTEM_FIELD_GUIDANCE: Dict[str, str] = {
    "createdOn": "Map from SQL audit columns like created_date, create_time, date_created",
    "createdBy": "Map from SQL audit columns like created_by, creator_id, created_user",
    "modifiedOn": "Map from SQL audit columns like modified_date, update_time, last_modified",
    "modifiedBy": "Map from SQL audit columns like modified_by, updater_id, last_user",
    "owner": "Map from SQL user/owner columns like owner_id, assigned_to, user_id",
    "state": "Map from SQL status/state columns like status, state, is_active",
    "status": "Map from SQL detailed status columns like status_code, detailed_status",
}


def _source_column_payload(column: Column) -> Dict[str, Any]:
    return {
        "name": column.name,
        "dataType": column.data_type,
        "length": column.length,
        "precision": column.precision,
        "scale": column.scale,
        "isIdentity": column.is_identity,
        "isPrimaryId": column.is_primary_id,
        "isPrimaryName": column.is_primary_name,
        "isRequired": column.is_required,
    }


def _target_column_payload(column: Column) -> Dict[str, Any]:
    is_system = bool(column.is_system_field)
    return {
        "name": column.name,
        "dataType": column.data_type,
        "length": column.length,
        "isRequired": column.is_required,
        "isPrimaryId": column.is_primary_id,
        "isPrimaryName": column.is_primary_name,
        "isSystemField": is_system,
        "systemFieldType": column.system_field_category.value if is_system else "none",
    }


def build_request_payload(
    source: Schema,
    target: Schema,
    requested_source_columns: Optional[Set[str]] = None,
) -> Dict[str, Any]:
    """
    Build the structured request describing both schemas.

    Args:
        source: Source schema
        target: Target schema with classification attached
        requested_source_columns: Case-folded source names to include; empty or None means all

    Returns:
        JSON-serializable payload
    """
    source_columns = [
        _source_column_payload(col)
        for col in source.columns
        if not requested_source_columns or col.name.casefold() in requested_source_columns
    ]

    return {
        "sourceTable": source.name,
        "targetTable": target.name,
        "sourceColumns": source_columns,
        "customTargetColumns": [_target_column_payload(col) for col in target.custom_columns()],
        "systemTargetColumns": [_target_column_payload(col) for col in target.system_columns()],
        "mappingInstructions": {
            "priorityOrder": "Map custom fields first (higher priority), then system fields (lower priority)",
            "customFieldsPriority": "Custom business fields should be mapped with higher confidence",
            "systemFieldsGuidance": SYSTEM_FIELD_GUIDANCE,
        },
    }


def build_chat_request(
    deployment: str,
    user_json: str,
    reasoning_model: bool,
    temperature: float,
) -> Dict[str, Any]:
    """
    Build keyword arguments for ``chat.completions.create``.

    Reasoning models take a single user message with the instructions prepended
    and no temperature; standard models take separate system and user messages.

    Args:
        deployment: Deployment / model name
        user_json: Serialized request payload
        reasoning_model: Whether the deployment is a reasoning model
        temperature: Sampling temperature for standard models

    Returns:
        Request keyword arguments
    """
    if reasoning_model:
        messages: List[Dict[str, str]] = [
            {"role": "user", "content": f"{SYSTEM_PROMPT}\n\nUser Request:\n{user_json}"},
        ]
        return {
            "model": deployment,
            "messages": messages,
            "max_completion_tokens": REASONING_MODEL_MAX_COMPLETION_TOKENS,
        }

    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_json},
    ]
    return {
        "model": deployment,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": STANDARD_MODEL_MAX_TOKENS,
    }
