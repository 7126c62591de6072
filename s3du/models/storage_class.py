# models/storage_class.py
"""
Normalises the storage tier labels reported by S3 and CloudWatch.

CloudWatch reports one ``StorageType`` per billing sub-category (storage,
object overhead, staging, ...) while S3 object listings use upper-case
``StorageClass`` names. Both collapse onto one canonical tier here. Labels
that aren't in the table come back as ``UnknownStorageClass`` carrying the
original string, so a new AWS tier never breaks a run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class StorageClass(Enum):
    DEEP_ARCHIVE = "DeepArchive"
    GLACIER = "Glacier"
    GLACIER_INSTANT_RETRIEVAL = "GlacierInstantRetrieval"
    INTELLIGENT_TIERING = "IntelligentTiering"
    ONE_ZONE_IA = "OneZoneIA"
    REDUCED_REDUNDANCY = "ReducedRedundancy"
    STANDARD = "Standard"
    STANDARD_IA = "StandardIA"


@dataclass(frozen=True)
class UnknownStorageClass:
    """A tier label we don't recognise yet."""

    raw: str

    def __str__(self) -> str:
        return self.raw


StorageClassValue = Union[StorageClass, UnknownStorageClass]


_LABELS = {
    # CloudWatch StorageType dimension values
    "DeepArchiveStorage": StorageClass.DEEP_ARCHIVE,
    "DeepArchiveObjectOverhead": StorageClass.DEEP_ARCHIVE,
    "DeepArchiveS3ObjectOverhead": StorageClass.DEEP_ARCHIVE,
    "DeepArchiveStagingStorage": StorageClass.DEEP_ARCHIVE,
    "GlacierObjectOverhead": StorageClass.GLACIER,
    "GlacierStorage": StorageClass.GLACIER,
    "GlacierStagingStorage": StorageClass.GLACIER,
    "GlacierS3ObjectOverhead": StorageClass.GLACIER,
    "GlacierInstantRetrievalStorage": StorageClass.GLACIER_INSTANT_RETRIEVAL,
    "GlacierIRSizeOverhead": StorageClass.GLACIER_INSTANT_RETRIEVAL,
    "IntelligentTieringStorage": StorageClass.INTELLIGENT_TIERING,
    "IntelligentTieringFAStorage": StorageClass.INTELLIGENT_TIERING,
    "IntelligentTieringIAStorage": StorageClass.INTELLIGENT_TIERING,
    "IntelligentTieringAAStorage": StorageClass.INTELLIGENT_TIERING,
    "IntelligentTieringAIAStorage": StorageClass.INTELLIGENT_TIERING,
    "IntelligentTieringDAAStorage": StorageClass.INTELLIGENT_TIERING,
    "OneZoneIASizeOverhead": StorageClass.ONE_ZONE_IA,
    "OneZoneIAStorage": StorageClass.ONE_ZONE_IA,
    "ReducedRedundancyStorage": StorageClass.REDUCED_REDUNDANCY,
    "StandardIAObjectOverhead": StorageClass.STANDARD_IA,
    "StandardIASizeOverhead": StorageClass.STANDARD_IA,
    "StandardIAStorage": StorageClass.STANDARD_IA,
    "StandardStorage": StorageClass.STANDARD,

    # S3 StorageClass values
    "DEEP_ARCHIVE": StorageClass.DEEP_ARCHIVE,
    "GLACIER": StorageClass.GLACIER,
    "GLACIER_IR": StorageClass.GLACIER_INSTANT_RETRIEVAL,
    "INTELLIGENT_TIERING": StorageClass.INTELLIGENT_TIERING,
    "ONEZONE_IA": StorageClass.ONE_ZONE_IA,
    "REDUCED_REDUNDANCY": StorageClass.REDUCED_REDUNDANCY,
    "STANDARD": StorageClass.STANDARD,
    "STANDARD_IA": StorageClass.STANDARD_IA,
}


def classify(raw: str) -> StorageClassValue:
    """Map a raw S3 or CloudWatch tier label onto its canonical tier."""
    try:
        return _LABELS[raw]
    except KeyError:
        return UnknownStorageClass(raw)


def to_display_string(storage_class: StorageClassValue) -> str:
    if isinstance(storage_class, UnknownStorageClass):
        return storage_class.raw
    return storage_class.value
