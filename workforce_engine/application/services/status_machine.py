"""
Job status machine.

Legal moves live on ``JobStatus``; this service enforces them and derives the
timestamp side effects of each transition.
"""

from typing import Any, Dict, Optional

from workforce_engine.application.services.job_validation import validate_job_completion
from workforce_engine.config.logging import get_logger
from workforce_engine.domain.clock import Clock, utc_now
from workforce_engine.domain.entities.job import Job
from workforce_engine.domain.exceptions.job_error import InvalidTransitionError
from workforce_engine.domain.value_objects.job_status import JobStatus

logger = get_logger(__name__)


class StatusMachine:
    """Guards status transitions and stamps progress timestamps."""

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    def validate(self, current: Any, requested: Any) -> JobStatus:
        """
        Check a transition against the table.

        Returns:
            The requested status as a ``JobStatus``

        Raises:
            InvalidTransitionError: if the pair is not in the table, including
                self-transitions and unknown status values
        """
        try:
            current_status = JobStatus(current)
            requested_status = JobStatus(requested)
        except ValueError:
            raise InvalidTransitionError(str(current), str(requested)) from None

        if not current_status.can_transition_to(requested_status):
            raise InvalidTransitionError(current_status.value, requested_status.value)
        return requested_status

    def transition(
        self, job: Job, new_status: Any, completion: Optional[Any] = None
    ) -> Dict[str, Any]:
        """
        Compute the field changes for moving ``job`` to ``new_status``.

        The job itself is not modified.

        Args:
            job: Job in its current state
            new_status: Requested status
            completion: Completion payload, validated when entering ``completed``

        Returns:
            Changes to apply: ``status`` plus any stamped timestamps

        Raises:
            InvalidTransitionError: if the transition is not allowed
            ValidationError: if the completion payload is invalid
        """
        status = self.validate(job.status, new_status)
        changes: Dict[str, Any] = {"status": status}
        now = self.clock()

        if status == JobStatus.IN_PROGRESS and job.started_at is None:
            changes["started_at"] = now

        if status == JobStatus.COMPLETED:
            validate_job_completion(completion or {}).raise_for_errors(
                "Job completion is invalid"
            )
            if job.completed_at is None:
                changes["completed_at"] = now

        logger.debug(
            "Status transition accepted",
            job_id=job.id,
            from_status=job.status.value,
            to_status=status.value,
        )
        return changes
