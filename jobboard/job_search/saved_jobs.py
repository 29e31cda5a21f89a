"""
Saved jobs: bookmark postings for the signed-in user.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

import httpx
from pydantic import ValidationError

from ..api.errors import AuthenticationRequired, JobBoardError, ServerError
from ..api.http import bearer_headers, ensure_json, ensure_success, parse_json
from ..storage.models import JobPost, NavigationCommand, SavedJob
from ..utils.config import Config

TokenProvider = Callable[[], Optional[str]]


class SavedJobsClient:
    """Client for the user's saved-jobs endpoint.

    Failures are logged and reported as ``False`` or an empty list.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        token_provider: TokenProvider,
        config: Optional[Config] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._http = http
        self._token_provider = token_provider
        self._config = config or Config()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token_provider())

    def _headers(self):
        token = self._token_provider()
        if not token:
            raise AuthenticationRequired("Authentication required")
        return bearer_headers(token)

    async def _request(self, method: str, **kwargs):
        """Send an authenticated request and return the decoded JSON body."""
        response = await self._http.request(
            method, self._config.saved_jobs_path, headers=self._headers(), **kwargs
        )
        ensure_json(response)
        data = parse_json(response)
        ensure_success(response, data)
        if not isinstance(data, dict):
            raise ServerError("Server returned invalid data. Please try again.", response.status_code)
        return data

    async def list_saved(self) -> List[SavedJob]:
        """Get the user's saved jobs.

        Returns:
            List of saved jobs; empty when signed out or on any error
        """
        if not self.is_authenticated:
            return []
        try:
            data = await self._request("GET")
            if not data.get("success"):
                return []
            return [SavedJob.model_validate(entry) for entry in data.get("savedJobs") or []]
        except (JobBoardError, ValidationError, httpx.HTTPError) as e:
            self._logger.error("Error listing saved jobs: %s", e, extra={"event": "saved_jobs.list_failed"})
            return []

    async def is_saved(self, job_id: str) -> bool:
        """Check whether a job is in the user's saved list."""
        return any(saved.job_id == job_id for saved in await self.list_saved())

    async def save(self, job: JobPost) -> bool:
        """Save a job.

        Args:
            job: Posting to save

        Returns:
            True if the backend confirmed the save
        """
        payload = {
            "jobId": job.id,
            "title": job.title,
            "company": job.company,
            "location": job.location,
            "date": datetime.now(timezone.utc).isoformat(),
        }
        try:
            data = await self._request("POST", json=payload)
        except (JobBoardError, httpx.HTTPError) as e:
            self._logger.error("Error saving job %s: %s", job.id, e, extra={"event": "saved_jobs.save_failed"})
            return False
        if not data.get("success"):
            return False
        self._logger.info("Saved job %s", job.id, extra={"event": "saved_jobs.saved", "job_id": job.id})
        return True

    async def remove(self, job_id: str) -> bool:
        """Remove a job from the saved list.

        Returns:
            True if the backend confirmed the removal
        """
        try:
            data = await self._request("DELETE", params={"jobId": job_id})
        except (JobBoardError, httpx.HTTPError) as e:
            self._logger.error("Error removing saved job %s: %s", job_id, e, extra={"event": "saved_jobs.remove_failed"})
            return False
        if not data.get("success"):
            return False
        self._logger.info("Removed saved job %s", job_id, extra={"event": "saved_jobs.removed", "job_id": job_id})
        return True

    async def toggle(self, job: JobPost, currently_saved: bool) -> Union[bool, NavigationCommand]:
        """Save or un-save a job.

        Args:
            job: Posting to toggle
            currently_saved: Whether the job is saved right now

        Returns:
            The saved state after the call, or a navigation command to the
            login page when signed out
        """
        if not self.is_authenticated:
            return NavigationCommand(path="/login")
        if currently_saved:
            return not await self.remove(job.id)
        return await self.save(job)
