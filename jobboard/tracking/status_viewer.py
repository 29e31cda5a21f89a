"""
Applications dashboard: fetches the user's applications and filters them.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Union

import httpx
from pydantic import ValidationError

from .filters import build_rows
from ..api.errors import JobBoardError, ServerError
from ..api.http import bearer_headers, ensure_json, parse_json
from ..storage.models import Application, ApplicationRow, NavigationCommand, StatusFilter
from ..utils.config import Config

TokenProvider = Callable[[], Optional[str]]

LOAD_FAILED = "Failed to load your applications. Please try again later."
LOGIN_PATH = "/login"


def fallback_applications(now: Optional[datetime] = None) -> List[Application]:
    """Sample applications shown when the real fetch fails."""
    now = now or datetime.now(timezone.utc)
    return [
        Application(
            id="app1",
            job_id="1",
            full_name="John Doe",
            email="john@example.com",
            phone="1234567890",
            resume="resume.pdf",
            applied_date=now.isoformat(),
            status="pending",
            job={"title": "Frontend Developer", "company": "Tech Corp", "location": "Remote", "type": "Full-time"},
        ),
        Application(
            id="app2",
            job_id="2",
            full_name="John Doe",
            email="john@example.com",
            phone="1234567890",
            resume="resume.pdf",
            applied_date=(now - timedelta(days=7)).isoformat(),
            status="interview",
            job={"title": "Backend Developer", "company": "Software Inc", "location": "New York", "type": "Full-time"},
        ),
    ]


class ApplicationStatusViewer:
    """Holds the fetched applications and the dashboard's filter state."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        token_provider: TokenProvider,
        config: Optional[Config] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the viewer.

        Args:
            http: Client used for the fetch
            token_provider: Returns the bearer token, or None when signed out
            config: Endpoint configuration. If None, defaults are used
            logger: Optional logger; defaults to this module's logger
        """
        self._http = http
        self._token_provider = token_provider
        self._config = config or Config()
        self._logger = logger or logging.getLogger(__name__)
        self._closed = False

        self.applications: List[Application] = []
        self.is_loading = False
        self.error: Optional[str] = None
        self.fetch_error: Optional[str] = None
        self.using_fallback = False
        self.navigation: Optional[NavigationCommand] = None
        self.active_filter = StatusFilter.ALL
        self.search_query = ""

    async def load(self):
        """Fetch the applications, substituting sample data if the fetch fails.

        A missing token is a page-level error and requests a redirect to the
        login page. Any other failure keeps the page usable: the sample data
        is shown and the failure is kept in ``fetch_error``.
        """
        if self._closed:
            return

        token = self._token_provider()
        if not token:
            self._logger.error("No authentication token found", extra={"event": "applications.unauthenticated"})
            self.error = LOAD_FAILED
            self.navigation = NavigationCommand(path=LOGIN_PATH)
            return

        self.error = None
        self.is_loading = True
        try:
            applications = await self._fetch(token)
        except (JobBoardError, ValidationError, httpx.HTTPError) as e:
            if self._closed:
                return
            self.fetch_error = str(e) or type(e).__name__
            self.using_fallback = True
            self.applications = fallback_applications()
            self._logger.error(
                "Fetching applications failed, showing sample data: %s", self.fetch_error,
                extra={"event": "applications.fetch_failed", "reason": self.fetch_error}
            )
        else:
            if self._closed:
                return
            self.applications = applications
            self.fetch_error = None
            self.using_fallback = False
            self._logger.info(
                "Loaded %d application(s)", len(applications),
                extra={"event": "applications.loaded", "count": len(applications)}
            )
        finally:
            self.is_loading = False

    async def _fetch(self, token: str) -> List[Application]:
        response = await self._http.get(
            self._config.user_applications_path,
            headers=bearer_headers(token)
        )
        self._logger.debug(
            "Applications response status %d", response.status_code,
            extra={"event": "applications.response", "status": response.status_code}
        )

        if not response.is_success:
            raise ServerError(f"Failed to fetch applications: {response.status_code}", response.status_code)
        ensure_json(response, "Server returned non-JSON response")
        data = parse_json(response)

        records = data.get("applications") if isinstance(data, dict) else None
        if not isinstance(records, list):
            self._logger.warning("No applications array in response", extra={"event": "applications.missing"})
            return []
        return [Application.model_validate(record) for record in records]

    def set_filter(self, status_filter: Union[str, StatusFilter]):
        self.active_filter = StatusFilter(status_filter)

    def set_search(self, query: str):
        self.search_query = query or ""

    @property
    def rows(self) -> List[ApplicationRow]:
        """Rows for the current filter and search, from the full list."""
        return build_rows(self.applications, self.active_filter, self.search_query)

    def close(self):
        """Stop accepting results from a fetch still in flight."""
        self._closed = True
