# File: clipwork/core/jobs/manager.py

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from clipwork.core.cancellation import CancellationToken
from clipwork.core.database.connection import SessionLocal
from clipwork.core.errors import ClipworkError, JobCancelled, ValidationError
from .models import JobModel
from .types import JobType, JobStatus

logger = logging.getLogger(__name__)


class JobManager:
    """
    The Central Dispatcher.
    It doesn't know *how* to do the job, but it knows *who* can.

    run_job() blocks for as long as the pipeline runs; call it from a worker
    thread, never from a UI thread.
    """

    def submit_job(self, job_type: JobType, params: Optional[dict] = None) -> UUID:
        """Create a Job Record in PENDING state."""
        with SessionLocal() as db:
            job = JobModel(job_type=job_type, payload=params or {})
            db.add(job)
            db.commit()
            db.refresh(job)
            logger.info(f"Job Submitted: {job.id} [{job_type}]")
            return job.id

    def run_job(self, job_id: UUID, cancel_token: Optional[CancellationToken] = None) -> Optional[JobStatus]:
        """
        Executes a specific job by routing it to the appropriate feature handler.
        Returns the terminal status (None if the job does not exist).
        """
        with SessionLocal() as db:
            job = db.get(JobModel, job_id)
            if not job:
                logger.error(f"Job {job_id} not found.")
                return None

            # Update Status -> PROCESSING
            job.status = JobStatus.PROCESSING
            job.started_at = datetime.now(timezone.utc)
            db.commit()

            try:
                logger.info(f"Starting Job {job_id} ({job.job_type})...")

                # Dynamic Routing to Feature Handlers
                result = self._route_to_feature(job, cancel_token)

                # Update Status -> COMPLETED
                job.result_meta = result
                job.status = JobStatus.COMPLETED
                logger.info(f"Job {job_id} Completed successfully.")

            except ValidationError as e:
                # Caller's fault: rejected before any external process ran
                job.status = JobStatus.REJECTED
                job.error_stage = e.stage
                job.error_message = str(e)
                logger.warning(f"Job {job_id} Rejected: {e}")

            except JobCancelled as e:
                job.status = JobStatus.CANCELLED
                job.error_stage = e.stage
                job.error_message = str(e)
                logger.info(f"Job {job_id} Cancelled at stage {e.stage}")

            except ClipworkError as e:
                # Pipeline failure: workspace was already cleaned by the feature
                job.status = JobStatus.FAILED
                job.error_stage = e.stage
                job.error_message = str(e)
                logger.error(f"Job {job_id} Failed: {e}")

            except Exception as e:
                # Unexpected execution error
                job.status = JobStatus.FAILED
                job.error_message = str(e)
                logger.exception(f"Job {job_id} Failed: {e}")

            finally:
                job.finished_at = datetime.now(timezone.utc)
                db.commit()

            return job.status

    def _route_to_feature(self, job: JobModel, cancel_token: Optional[CancellationToken]) -> dict:
        """
        Routes the job to the correct Feature Handler.
        Uses lazy imports to prevent circular dependencies.
        """
        if job.job_type == JobType.TRANSCODE:
            from clipwork.features.processing.service.job_handler import ProcessingHandler
            return ProcessingHandler().handle(job.payload, cancel_token)

        elif job.job_type == JobType.MERGE:
            from clipwork.features.merging.service.job_handler import MergeHandler
            return MergeHandler().handle(job.payload, cancel_token)

        elif job.job_type == JobType.AD_INSERTION:
            from clipwork.features.ad_insertion.service.job_handler import AdInsertionHandler
            return AdInsertionHandler().handle(job.payload, cancel_token)

        raise ValidationError(f"No handler registered for JobType: {job.job_type}", stage="route")
