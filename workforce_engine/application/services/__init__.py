"""
Application services.
"""

from .data_sanitizer import sanitize_job_payload, sanitize_string
from .job_query_engine import GeoFilter, JobFilter, JobPage, JobQueryEngine, NearbyJob
from .job_recommendation_engine import JobRecommendation, JobRecommendationEngine
from .job_statistics import JobStats, TechnicianWorkload, compute_stats, compute_workload
from .job_validation import ValidationResult
from .status_machine import StatusMachine

__all__ = [
    "GeoFilter",
    "JobFilter",
    "JobPage",
    "JobQueryEngine",
    "JobRecommendation",
    "JobRecommendationEngine",
    "JobStats",
    "NearbyJob",
    "StatusMachine",
    "TechnicianWorkload",
    "ValidationResult",
    "compute_stats",
    "compute_workload",
    "sanitize_job_payload",
    "sanitize_string",
]
