# ABOUTME: Metadata package: catalog adapters, HTTP layer, and the catalog resolver.
# ABOUTME: Exports the MetadataRecord model and the CatalogAdapter protocol.

from shelfie.metadata.provider import CatalogAdapter
from shelfie.metadata.types import (
    Attachment,
    AttachmentKind,
    Contributor,
    MetadataRecord,
    SourceType,
)

__all__ = [
    "Attachment",
    "AttachmentKind",
    "CatalogAdapter",
    "Contributor",
    "MetadataRecord",
    "SourceType",
]
