from typing import Optional


class DanceAnalysisError(Exception):
    """Base class for errors raised by the analysis and comparison engine."""


class ExternalCallFailed(DanceAnalysisError):
    """The text-generation capability was unreachable, errored or returned nothing."""


class AnalysisFailed(DanceAnalysisError):
    def __init__(self, record_id: str, reason: str):
        super().__init__(f"Analysis of video {record_id} failed: {reason}")
        self.record_id = record_id
        self.reason = reason


class IncompleteRecord(DanceAnalysisError):
    """Comparison was requested on a record that has not completed analysis."""

    def __init__(self, record_id: str, status: str):
        super().__init__(f"Video {record_id} is '{status}', comparison requires a completed analysis")
        self.record_id = record_id
        self.status = status


class InvalidRole(DanceAnalysisError):
    pass


class RecordNotFound(DanceAnalysisError):
    def __init__(self, record_id: Optional[str]):
        super().__init__(f"Video {record_id} not found")
        self.record_id = record_id


class EmptyNarrative(DanceAnalysisError):
    pass
