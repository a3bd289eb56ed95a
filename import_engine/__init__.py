"""
import_engine - CSV/TSV bulk import pipeline.

Public API:
    run_import(file_content, group=None, ...) → completed row count
    ItemImporter(repo, group_id).run(sheet)  → completed row count
    read_sheet(file_content)                 → Sheet
"""

from import_engine.importer import run_import, ItemImporter     # noqa: F401
from import_engine.csv_parser import read_sheet                 # noqa: F401
from import_engine.report import ImportReport                   # noqa: F401
from import_engine.errors import (                              # noqa: F401
    ImportEngineError,
    HeaderMismatchError,
    SheetFormatError,
    ImportValidationError,
    CatalogLookupError,
    MaterializationError,
    PersistenceError,
    ConsistencyError,
    ImportCancelled,
)
