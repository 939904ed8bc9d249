"""Requirement model, catalog interface and catalog loaders."""

from .requirements import (
    Applicability,
    BindingLevel,
    RegimeComparison,
    Requirement,
    RequirementCatalog,
    RequirementCategory,
    Severity,
    StaticCatalog,
)
from .loaders import CatalogLoader, load_catalog, read_json

__all__ = [
    "Applicability",
    "BindingLevel",
    "RegimeComparison",
    "Requirement",
    "RequirementCatalog",
    "RequirementCategory",
    "Severity",
    "StaticCatalog",
    "CatalogLoader",
    "load_catalog",
    "read_json",
]
