from .catalog_client import CatalogClientPort
from .source_registry import SourceRegistryPort

__all__ = [
    "CatalogClientPort",
    "SourceRegistryPort",
]
