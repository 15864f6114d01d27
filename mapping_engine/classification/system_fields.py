"""
System Field Tables

Static lookup tables describing the business platform's housekeeping fields.
"""

from typing import Dict, Tuple

from mapping_engine.models.schema import SystemFieldCategory


# Well-known platform field names (lower-case) -> taxonomy category
SYSTEM_FIELD_NAMES: Dict[str, SystemFieldCategory] = {
    # Audit
    "createdon": SystemFieldCategory.CREATED_ON,
    "createdby": SystemFieldCategory.CREATED_BY,
    "modifiedon": SystemFieldCategory.MODIFIED_ON,
    "modifiedby": SystemFieldCategory.MODIFIED_BY,
    "overriddencreatedon": SystemFieldCategory.OVERRIDDEN_CREATED_ON,

    # Ownership
    "ownerid": SystemFieldCategory.OWNER,
    "owninguser": SystemFieldCategory.OWNER,
    "owningbusinessunit": SystemFieldCategory.BUSINESS_UNIT,
    "owningteam": SystemFieldCategory.BUSINESS_UNIT,

    # State
    "statecode": SystemFieldCategory.STATE,
    "statuscode": SystemFieldCategory.STATUS,

    # Version / sequence counters
    "versionnumber": SystemFieldCategory.VERSION,
    "importsequencenumber": SystemFieldCategory.IMPORT_SEQUENCE,

    # Time zone
    "timezoneruleversionnumber": SystemFieldCategory.TIME_ZONE_RULE,
    "utcconversiontimezonecode": SystemFieldCategory.UTC_CONVERSION_TIME_ZONE,

    # Currency sync
    "exchangerate": SystemFieldCategory.OTHER,
    "transactioncurrencyid": SystemFieldCategory.OTHER,
}

# Vendor namespace prefixes (lower-case); any match is classified as OTHER
SYSTEM_FIELD_PREFIXES: Tuple[str, ...] = (
    "msft_",
    "msdyn_",
    "mspcat_",
)

# Priority of custom (business) fields; always resolved first
CUSTOM_FIELD_PRIORITY = 1

# Priority per system-field category, lower is resolved first
SYSTEM_FIELD_PRIORITIES: Dict[SystemFieldCategory, int] = {
    SystemFieldCategory.CREATED_ON: 2,
    SystemFieldCategory.CREATED_BY: 2,
    SystemFieldCategory.MODIFIED_ON: 2,
    SystemFieldCategory.MODIFIED_BY: 2,
    SystemFieldCategory.STATE: 3,
    SystemFieldCategory.STATUS: 3,
    SystemFieldCategory.OWNER: 4,
    SystemFieldCategory.BUSINESS_UNIT: 4,
    SystemFieldCategory.VERSION: 5,
    SystemFieldCategory.IMPORT_SEQUENCE: 6,
    SystemFieldCategory.OVERRIDDEN_CREATED_ON: 7,
    SystemFieldCategory.TIME_ZONE_RULE: 8,
    SystemFieldCategory.UTC_CONVERSION_TIME_ZONE: 8,
    SystemFieldCategory.OTHER: 9,
    # System field flagged at ingestion without a category
    SystemFieldCategory.NONE: 10,
}
