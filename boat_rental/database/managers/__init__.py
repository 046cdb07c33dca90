from .catalog_manager import CatalogManager

__all__ = [
    'CatalogManager',
]
