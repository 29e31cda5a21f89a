"""
Main interface for job board users.
"""
import logging
from typing import Callable, Optional

import httpx

from ..api.http import build_client
from ..job_apply.application_form import ApplicationForm, SuccessCallback
from ..job_search.saved_jobs import SavedJobsClient
from ..storage.models import JobPost
from ..tracking.status_viewer import ApplicationStatusViewer
from ..utils.config import Config
from ..utils.logger import setup_logger


class JobBoard:
    """Entry point wiring the job-board components to one HTTP client."""

    def __init__(
        self,
        config: Optional[Config] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        log_file: Optional[str] = None
    ):
        """Initialize the job board client.

        Args:
            config: Optional configuration. If None, read from the environment
            token_provider: Optional callable returning the bearer token.
                If None, the token from the configuration is used
            transport: Optional httpx transport, mainly for tests
            log_file: Optional file receiving the log output as well
        """
        self.config = config or Config()
        self.logger = setup_logger("jobboard", log_file=log_file, level=self.config.log_level)
        self._token_provider = token_provider or self.config.token_provider()
        self._http = build_client(self.config, transport=transport)
        self._viewers = []

        self.saved_jobs = SavedJobsClient(
            self._http,
            self._token_provider,
            config=self.config,
            logger=self._component_logger("saved_jobs")
        )

    def _component_logger(self, name: str) -> logging.Logger:
        return self.logger.getChild(name)

    def application_form(self, job: JobPost, on_success: Optional[SuccessCallback] = None) -> ApplicationForm:
        """Create an application form for a job posting.

        Args:
            job: Posting to apply to
            on_success: Optional callback receiving the new application id
        """
        return ApplicationForm(
            job,
            self._http,
            config=self.config,
            on_success=on_success,
            logger=self._component_logger("application_form")
        )

    def status_viewer(self) -> ApplicationStatusViewer:
        """Create a dashboard viewer for the signed-in user's applications."""
        viewer = ApplicationStatusViewer(
            self._http,
            self._token_provider,
            config=self.config,
            logger=self._component_logger("status_viewer")
        )
        self._viewers.append(viewer)
        return viewer

    async def close(self):
        """Clean up resources."""
        for viewer in self._viewers:
            viewer.close()
        self._viewers = []
        await self._http.aclose()
