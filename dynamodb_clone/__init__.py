from .content import clone_content
from .schema import build_create_table_request, duplicate_schema
from .tables import table_exists

__all__ = [
    "build_create_table_request",
    "clone_content",
    "duplicate_schema",
    "table_exists",
]
