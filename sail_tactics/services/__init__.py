from .session_analysis import (
    AnalysisParameters,
    BatchAnalysis,
    SessionAnalysis,
    SessionAnalysisService,
    SessionAnalysisServiceConfig,
    analyze_session,
)

__all__ = [
    "AnalysisParameters",
    "BatchAnalysis",
    "SessionAnalysis",
    "SessionAnalysisService",
    "SessionAnalysisServiceConfig",
    "analyze_session",
]
