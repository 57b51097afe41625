"""
Job recommendation engine for ranking open jobs for a technician.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from workforce_engine.config.logging import get_logger
from workforce_engine.config.settings import settings
from workforce_engine.domain.entities.job import Job
from workforce_engine.domain.entities.technician import Technician
from workforce_engine.domain.exceptions.validation_error import ValidationError
from workforce_engine.domain.value_objects.job_priority import JobPriority
from workforce_engine.domain.value_objects.job_status import JobStatus

logger = get_logger(__name__)

SKILL_WEIGHT = 50.0

PRIORITY_SCORES = {
    JobPriority.URGENT: 30.0,
    JobPriority.HIGH: 20.0,
    JobPriority.MEDIUM: 10.0,
    JobPriority.LOW: 5.0,
}

# (max distance in km, score), checked in order
DISTANCE_BANDS = ((5.0, 20.0), (10.0, 15.0), (20.0, 10.0), (50.0, 5.0))


@dataclass
class JobRecommendation:
    """Score breakdown of one job for one technician."""

    job: Job
    score: float
    skill_score: float
    priority_score: float
    distance_score: float
    distance_km: Optional[float]
    matched_skills: List[str]
    missing_skills: List[str]


class JobRecommendationEngine:
    """Ranks candidate jobs by skill match, priority and distance."""

    def __init__(self):
        self.logger = logger

    def recommend(
        self,
        technician: Technician,
        candidate_jobs: Sequence[Job],
        max_results: Optional[int] = None,
    ) -> List[Job]:
        """
        Pick the best pending jobs for a technician.

        Args:
            technician: Technician to recommend for
            candidate_jobs: Jobs to consider; only pending ones are scored
            max_results: Maximum number of jobs to return

        Returns:
            Jobs sorted by score (highest first). Equal scores keep input order.
        """
        return [match.job for match in self.rank(technician, candidate_jobs, max_results)]

    def rank(
        self,
        technician: Technician,
        candidate_jobs: Sequence[Job],
        max_results: Optional[int] = None,
    ) -> List[JobRecommendation]:
        """Score pending candidates and return the top ones with their breakdown."""
        if max_results is None:
            max_results = settings.RECOMMENDATION_MAX_RESULTS
        elif max_results <= 0:
            raise ValidationError(
                ["Maximum results must be greater than 0"], "Invalid recommendation request"
            )

        self.logger.info(
            "Ranking jobs for technician",
            technician_id=technician.id,
            candidates=len(candidate_jobs),
            max_results=max_results,
        )

        matches = [
            self.score_job(technician, job)
            for job in candidate_jobs
            if job.status == JobStatus.PENDING
        ]

        # list.sort is stable, so ties keep their input order
        matches.sort(key=lambda match: match.score, reverse=True)
        matches = matches[:max_results]

        self.logger.info(
            "Ranked jobs for technician",
            technician_id=technician.id,
            total_matches=len(matches),
            top_score=matches[0].score if matches else 0,
        )
        return matches

    def score_job(self, technician: Technician, job: Job) -> JobRecommendation:
        """Compute the additive score of a job for a technician."""
        skill_score, matched_skills, missing_skills = self._calculate_skill_score(
            technician, job
        )
        priority_score = self._calculate_priority_score(job.priority)
        distance_km = None
        distance_score = 0.0
        if technician.current_location is not None:
            location = technician.current_location
            distance_km = job.distance_to(location.latitude, location.longitude)
            distance_score = self._calculate_distance_score(distance_km)

        return JobRecommendation(
            job=job,
            score=skill_score + priority_score + distance_score,
            skill_score=skill_score,
            priority_score=priority_score,
            distance_score=distance_score,
            distance_km=distance_km,
            matched_skills=matched_skills,
            missing_skills=missing_skills,
        )

    def _calculate_skill_score(self, technician: Technician, job: Job):
        """
        Share of required skills the technician has, scaled to 50.

        Returns:
            Tuple of (score, matched_skills, missing_skills)
        """
        required = job.required_skills
        if not required:
            # Nothing required counts as a full match
            return SKILL_WEIGHT, [], []

        matched_skills = [skill for skill in required if technician.has_skill(skill)]
        missing_skills = [skill for skill in required if not technician.has_skill(skill)]
        score = SKILL_WEIGHT * len(matched_skills) / len(required)
        return score, matched_skills, missing_skills

    def _calculate_priority_score(self, priority: JobPriority) -> float:
        return PRIORITY_SCORES.get(priority, 0.0)

    def _calculate_distance_score(self, distance_km: float) -> float:
        for max_distance, score in DISTANCE_BANDS:
            if distance_km <= max_distance:
                return score
        return 0.0
