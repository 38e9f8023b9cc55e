"""Data source interfaces for the edu-stats lookup."""

from .base import DataSource, LookupQuery, SourceMetadata
from .web_search import TrustedDomainSearchSource, load_trusted_domains
from .open_registry import OpenRegistrySource, RegistryUnavailable

__all__ = [
    "DataSource",
    "LookupQuery",
    "SourceMetadata",
    "TrustedDomainSearchSource",
    "load_trusted_domains",
    "OpenRegistrySource",
    "RegistryUnavailable",
]
