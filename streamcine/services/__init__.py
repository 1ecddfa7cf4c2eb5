"""
Services package for StreamCine

This package contains catalog loading, caching and request handling logic.
"""
from streamcine.services.addon_service import AddonService, build_manifest
from streamcine.services.catalog_store import CatalogKind, CatalogPaths, CatalogStore
from streamcine.services.delimited_reader import read_delimited

__all__ = [
    'AddonService',
    'build_manifest',
    'CatalogKind',
    'CatalogPaths',
    'CatalogStore',
    'read_delimited',
]
