"""
Status mapping, row projection and filtering for the applications dashboard.

Everything here is pure: the dashboard recomputes its rows from the full
application list whenever the filter or the search query changes.
"""
from datetime import datetime
from typing import Iterable, List, Optional, Union

from ..storage.models import Application, ApplicationRow, BackendStatus, StatusFilter, UIStatus

STATUS_MAP = {
    BackendStatus.PENDING.value: UIStatus.APPLIED,
    BackendStatus.REVIEWED.value: UIStatus.APPLIED,
    BackendStatus.INTERVIEW.value: UIStatus.INTERVIEW,
    BackendStatus.REJECTED.value: UIStatus.REJECTED,
    BackendStatus.ACCEPTED.value: UIStatus.OFFER,
}

UNKNOWN_TITLE = "Unknown Job"
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_LOCATION = "Unknown Location"
INVALID_DATE = "Invalid Date"


def map_status(status: Union[str, BackendStatus, None]) -> UIStatus:
    """Map a backend status to the dashboard vocabulary.

    Unrecognised values map to ``applied``.
    """
    if isinstance(status, BackendStatus):
        status = status.value
    return STATUS_MAP.get(status, UIStatus.APPLIED)

def format_applied_date(value: Optional[str]) -> str:
    """Format an ISO timestamp as M/D/YYYY."""
    if not value:
        return INVALID_DATE
    try:
        # fromisoformat rejects the trailing Z before Python 3.11
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return INVALID_DATE
    return f"{parsed.month}/{parsed.day}/{parsed.year}"

def to_row(application: Application) -> ApplicationRow:
    job = application.job
    return ApplicationRow(
        id=application.id,
        title=(job.title if job else "") or UNKNOWN_TITLE,
        company=(job.company if job else "") or UNKNOWN_COMPANY,
        location=(job.location if job else "") or UNKNOWN_LOCATION,
        status=map_status(application.status),
        date=format_applied_date(application.applied_date),
    )

def matches_filter(application: Application, status_filter: Union[str, StatusFilter]) -> bool:
    status_filter = StatusFilter(status_filter)
    if status_filter is StatusFilter.ALL:
        return True
    return map_status(application.status).value == status_filter.value

def matches_search(application: Application, query: str) -> bool:
    """Case-insensitive substring match over job title, company and location."""
    if not query:
        return True
    query = query.lower()
    job = application.job
    fields = (job.title, job.company, job.location) if job else ()
    return any(query in (field or "").lower() for field in fields)

def filter_applications(
    applications: Iterable[Application],
    status_filter: Union[str, StatusFilter] = StatusFilter.ALL,
    query: str = ""
) -> List[Application]:
    """Applications passing both the status filter and the search query."""
    return [
        app for app in applications
        if matches_filter(app, status_filter) and matches_search(app, query)
    ]

def build_rows(
    applications: Iterable[Application],
    status_filter: Union[str, StatusFilter] = StatusFilter.ALL,
    query: str = ""
) -> List[ApplicationRow]:
    return [to_row(app) for app in filter_applications(applications, status_filter, query)]
