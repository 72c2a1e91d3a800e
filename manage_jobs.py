import argparse
import json
import logging
import sys
from uuid import UUID

from clipwork.core.database.connection import SessionLocal, init_db
from clipwork.core.jobs.manager import JobManager
from clipwork.core.jobs.models import JobModel
from clipwork.core.jobs.types import JobStatus, JobType
from clipwork.core.logging_config import setup_logging

logger = logging.getLogger("manage_jobs")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Clipwork job ledger")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the ledger tables")

    submit = sub.add_parser("submit", help="Record a PENDING job")
    submit.add_argument("job_type", choices=[t.value for t in JobType])
    submit.add_argument("payload", help="JSON object, e.g. '{\"sources\": [...], \"output\": \"out.mp4\"}'")
    submit.add_argument("--run", action="store_true", help="Run the job right after submitting it")

    run = sub.add_parser("run", help="Run a submitted job")
    run.add_argument("job_id", type=UUID)

    show = sub.add_parser("show", help="Print a job record")
    show.add_argument("job_id", type=UUID)

    parser.add_argument("--log-level", default=None)
    return parser


def _show(job_id: UUID) -> int:
    with SessionLocal() as db:
        job = db.get(JobModel, job_id)
        if not job:
            print(f"Job {job_id} not found.")
            return 1
        print(json.dumps({
            "id": str(job.id),
            "type": job.job_type.value,
            "status": job.status.value,
            "error_stage": job.error_stage,
            "error_message": job.error_message,
            "result": job.result_meta,
        }, indent=2))
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    init_db()

    if args.command == "init-db":
        logger.info("Ledger tables ready.")
        return 0

    manager = JobManager()

    if args.command == "submit":
        try:
            payload = json.loads(args.payload)
        except json.JSONDecodeError as e:
            logger.error(f"Payload is not valid JSON: {e}")
            return 2
        job_id = manager.submit_job(JobType(args.job_type), payload)
        print(job_id)
        if not args.run:
            return 0
        args.job_id = job_id

    if args.command in ("submit", "run"):
        status = manager.run_job(args.job_id)
        if status is None:
            return 1
        print(status.value)
        return 0 if status == JobStatus.COMPLETED else 1

    return _show(args.job_id)


if __name__ == "__main__":
    sys.exit(main())
