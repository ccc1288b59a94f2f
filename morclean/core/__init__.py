from .normalize import JobRecord, coerce_jobs, events_from_payload
from .date_parse import parse_job_date

__all__ = [
    "JobRecord",
    "coerce_jobs",
    "events_from_payload",
    "parse_job_date",
]
