import json

from clipwork.core.database.connection import SessionLocal
from clipwork.core.jobs.models import JobModel
from clipwork.core.jobs.types import JobStatus

import manage_jobs


def test_init_db_command():
    assert manage_jobs.main(["init-db"]) == 0


def test_submit_and_run_rejected_job(capsys):
    payload = json.dumps({"sources": ["a.mp4"], "output": "out.mp4"})

    code = manage_jobs.main(["submit", "merge", payload, "--run"])

    assert code == 1
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[-1] == JobStatus.REJECTED.value

    with SessionLocal() as db:
        job = db.query(JobModel).one()
        assert str(job.id) == lines[0]
        assert "at least two clips" in job.error_message


def test_submit_rejects_bad_json():
    assert manage_jobs.main(["submit", "merge", "{not json"]) == 2
