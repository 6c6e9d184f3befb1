"""Search pipeline stage domain model."""

from enum import Enum


class SearchStage(str, Enum):
    """Stages of the station-range search pipeline."""

    LOCATING = "locating"
    EXPANDING = "expanding"
    FANNING_OUT = "fanning_out"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"
