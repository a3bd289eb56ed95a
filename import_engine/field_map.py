"""
import_engine.field_map - Column-name ↔ item-attribute mapping.

Every column an import sheet may carry.  Headers outside this
vocabulary (and not custom-field columns) reject the whole sheet.
"""

# Custom fields: "HB.field.Color" → item field "Color"
FIELD_PREFIX = "HB.field."

# Sheet column → ImportRow attribute, grouped by cell type
TEXT_COLUMNS: dict[str, str] = {
    "HB.import_ref":       "import_ref",
    "HB.name":             "name",
    "HB.description":      "description",
    "HB.notes":            "notes",
    "HB.purchase_from":    "purchase_from",
    "HB.manufacturer":     "manufacturer",
    "HB.model_number":     "model_number",
    "HB.serial_number":    "serial_number",
    "HB.warranty_details": "warranty_details",
    "HB.sold_to":          "sold_to",
    "HB.sold_notes":       "sold_notes",
}

INT_COLUMNS: dict[str, str] = {
    "HB.quantity": "quantity",
}

FLOAT_COLUMNS: dict[str, str] = {
    "HB.purchase_price": "purchase_price",
    "HB.sold_price":     "sold_price",
}

BOOL_COLUMNS: dict[str, str] = {
    "HB.archived":          "archived",
    "HB.insured":           "insured",
    "HB.lifetime_warranty": "lifetime_warranty",
}

DATE_COLUMNS: dict[str, str] = {
    "HB.purchase_time":    "purchase_time",
    "HB.warranty_expires": "warranty_expires",
    "HB.sold_time":        "sold_time",
}

# Columns with their own parsing rules
LOCATION_COLUMN = "HB.location"
LABELS_COLUMN   = "HB.labels"
ASSET_ID_COLUMN = "HB.asset_id"

LABEL_SEPARATOR = ";"

TRUE_VALUES = frozenset({"true", "yes", "y", "1", "x"})

EXPECTED_HEADERS = frozenset().union(
    (LOCATION_COLUMN, LABELS_COLUMN, ASSET_ID_COLUMN),
    TEXT_COLUMNS, INT_COLUMNS, FLOAT_COLUMNS, BOOL_COLUMNS, DATE_COLUMNS,
)


def unknown_headers(headers) -> list[str]:
    """Return the headers that are neither expected nor custom-field columns."""
    return [
        h for h in headers
        if h not in EXPECTED_HEADERS
        and not (h.startswith(FIELD_PREFIX) and len(h) > len(FIELD_PREFIX))
    ]
