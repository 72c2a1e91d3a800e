from enum import Enum


class JobType(str, Enum):
    TRANSCODE = "transcode"
    MERGE = "merge"
    AD_INSERTION = "ad_insertion"


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"    # Validation error: nothing ran, nothing to clean
    CANCELLED = "cancelled"
