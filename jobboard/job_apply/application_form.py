"""
Application form: collects applicant input and submits it to the backend.
"""
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

import httpx

from .validation import is_valid_object_id, validate_application
from ..api.errors import JobBoardError, ServerError
from ..api.http import body_preview, ensure_json, ensure_success, parse_json
from ..storage.models import ApplicationFormData, JobPost, NavigationCommand, SubmissionResult
from ..utils.config import Config

SuccessCallback = Callable[[str], Union[None, Awaitable[None]]]

MISSING_JOB_ID = "Job ID is missing. Please try again or contact support."
SUBMISSION_IN_PROGRESS = "Submission already in progress"
SUBMISSION_FAILED = "Failed to submit application. Please try again."
INVALID_DATA = "Server returned invalid data. Please try again."
TEST_MODE_NOTICE = (
    "Your application was submitted in test mode. "
    "In a production environment, this would be saved to a database."
)

# Wire name -> attribute name for fields whose names differ
FIELD_NAMES = {"fullName": "full_name", "coverLetter": "cover_letter"}


class ApplicationForm:
    """Form state and submission workflow for one job posting."""

    def __init__(
        self,
        job: JobPost,
        http: httpx.AsyncClient,
        config: Optional[Config] = None,
        on_success: Optional[SuccessCallback] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the form.

        Args:
            job: Posting being applied to
            http: Client used for the submission requests
            config: Endpoint configuration. If None, defaults are used
            on_success: Optional callback receiving the new application id.
                When omitted, a successful submission returns a navigation
                command to the confirmation page instead
            logger: Optional logger; defaults to this module's logger
        """
        self.job = job
        self.data = ApplicationFormData()
        self.errors: Dict[str, str] = {}
        self.is_submitting = False

        self._http = http
        self._config = config or Config()
        self._on_success = on_success
        self._logger = logger or logging.getLogger(__name__)

    def set_field(self, name: str, value: str):
        """Update a field by wire or attribute name and clear its error."""
        attr = FIELD_NAMES.get(name, name)
        if attr not in ApplicationFormData.model_fields:
            raise ValueError(f"Unknown form field: {name}")
        setattr(self.data, attr, value)
        wire_name = ApplicationFormData.model_fields[attr].alias or attr
        self.errors.pop(wire_name, None)

    def choose_resume(self, file_name: str):
        """Record the chosen resume file name."""
        if file_name:
            self.set_field("resume", file_name)

    def validate(self) -> bool:
        """Run the field checks; replaces any previous errors."""
        self.errors = validate_application(self.data)
        return not self.errors

    def payload(self) -> Dict[str, Any]:
        return {"jobId": self.job.id, **self.data.model_dump(by_alias=True)}

    async def submit(self) -> SubmissionResult:
        """Validate and submit the application.

        Failures never raise: they are stored in ``errors`` (per field, or
        under ``submit`` for the request as a whole) and returned.

        Returns:
            SubmissionResult describing the outcome
        """
        if self.is_submitting:
            self._logger.warning(
                "Ignoring re-submission while a request is in flight",
                extra={"event": "submit.ignored", "job_id": self.job.id}
            )
            return SubmissionResult(errors={"submit": SUBMISSION_IN_PROGRESS})

        if not self.validate():
            self._logger.info(
                "Application form has %d invalid field(s)", len(self.errors),
                extra={"event": "submit.invalid", "fields": sorted(self.errors)}
            )
            return SubmissionResult(errors=dict(self.errors))

        if not self.job.id:
            self.errors["submit"] = MISSING_JOB_ID
            self._logger.error("Cannot submit application without a job id", extra={"event": "submit.missing_job_id"})
            return SubmissionResult(errors=dict(self.errors))

        self._logger.debug(
            "Submitting application for job %s (document id: %s)",
            self.job.id, is_valid_object_id(self.job.id),
            extra={"event": "submit.started", "job_id": self.job.id}
        )

        self.is_submitting = True
        try:
            application_id, used_fallback = await self._send()
        except (JobBoardError, httpx.HTTPError) as e:
            message = str(e) if isinstance(e, JobBoardError) and str(e) else SUBMISSION_FAILED
            self.errors["submit"] = message
            self._logger.error(
                "Error submitting application: %s", e,
                extra={"event": "submit.failed", "job_id": self.job.id}
            )
            return SubmissionResult(errors=dict(self.errors))
        finally:
            self.is_submitting = False

        return await self._complete(application_id, used_fallback)

    async def _send(self):
        """Post the payload, falling back once on a transport failure.

        Returns:
            Tuple of (application id, whether the fallback endpoint was used)
        """
        payload = self.payload()
        used_fallback = False

        try:
            response = await self._http.post(self._config.applications_path, json=payload)
        except httpx.TransportError as e:
            self._logger.warning(
                "Primary endpoint failed, retrying on fallback: %s", e,
                extra={"event": "submit.primary_failed", "job_id": self.job.id}
            )
            response = await self._http.post(self._config.fallback_path, json=payload)
            used_fallback = True

        self._logger.debug(
            "Submission response status %d", response.status_code,
            extra={"event": "submit.response", "status": response.status_code, "fallback": used_fallback}
        )

        try:
            ensure_json(
                response,
                f"Server returned non-JSON response ({response.status_code}). Please check server logs."
            )
        except JobBoardError:
            self._logger.error(
                "Non-JSON response (%s): %s",
                response.headers.get("content-type"), body_preview(response),
                extra={"event": "submit.non_json", "status": response.status_code}
            )
            raise

        data = parse_json(response)
        ensure_success(response, data)

        application = data.get("application") if isinstance(data, dict) else None
        if not isinstance(application, dict) or not application.get("id"):
            self._logger.error("Invalid response data: %r", data, extra={"event": "submit.invalid_response"})
            raise ServerError(INVALID_DATA, response.status_code)

        return str(application["id"]), used_fallback

    async def _complete(self, application_id: str, used_fallback: bool) -> SubmissionResult:
        """Signal completion through the callback or a navigation command."""
        self._logger.info(
            "Application submitted successfully: %s", application_id,
            extra={"event": "submit.succeeded", "application_id": application_id, "fallback": used_fallback}
        )
        result = SubmissionResult(
            ok=True,
            application_id=application_id,
            used_fallback=used_fallback,
            notice=TEST_MODE_NOTICE if used_fallback else None,
        )
        if used_fallback:
            self._logger.warning(
                "Application %s was handled by the test endpoint", application_id,
                extra={"event": "submit.fallback_used", "application_id": application_id}
            )

        if self._on_success is not None:
            outcome = self._on_success(application_id)
            if inspect.isawaitable(outcome):
                await outcome
        else:
            params = {"applicationId": application_id}
            if used_fallback:
                params["testMode"] = "true"
            result.navigation = NavigationCommand(
                path=f"/jobs/{self.job.id}/application-success",
                params=params
            )
        return result
