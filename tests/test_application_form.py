"""
Tests for the application form submission workflow.
"""
import asyncio
import json
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock
from jobboard.job_apply.application_form import (
    ApplicationForm, MISSING_JOB_ID, SUBMISSION_FAILED, SUBMISSION_IN_PROGRESS, TEST_MODE_NOTICE
)
from jobboard.storage.models import JobPost

PRIMARY = "/api/applications"
FALLBACK = "/api/test-application"

def connection_refused(request):
    raise httpx.ConnectError("Connection refused", request=request)

def created(application_id="x1"):
    return lambda request: httpx.Response(201, json={"application": {"id": application_id}})

@pytest.fixture
def form(sample_job, http, config, logger):
    """Create a filled in application form."""
    form = ApplicationForm(sample_job, http, config=config, logger=logger)
    form.set_field("fullName", "Jane Doe")
    form.set_field("email", "jane@example.com")
    form.set_field("phone", "555-0100")
    form.choose_resume("cv.pdf")
    return form

@pytest.mark.asyncio
async def test_invalid_form_makes_no_request(form, backend):
    """Test the missing-name scenario: one error, no network call."""
    form.set_field("fullName", "")
    form.set_field("email", "a@b.com")
    form.set_field("phone", "555")

    result = await form.submit()

    assert not result.ok
    assert result.errors == {"fullName": "Full name is required"}
    assert form.errors == {"fullName": "Full name is required"}
    assert backend.requests == []

@pytest.mark.asyncio
async def test_missing_job_id_makes_no_request(http, config, backend):
    job = JobPost(title="No Id", company="Corp", location="Remote")
    form = ApplicationForm(job, http, config=config)
    form.set_field("full_name", "Jane Doe")
    form.set_field("email", "jane@example.com")
    form.set_field("phone", "555")
    form.choose_resume("cv.pdf")

    result = await form.submit()

    assert result.errors == {"submit": MISSING_JOB_ID}
    assert backend.requests == []

@pytest.mark.asyncio
async def test_successful_submission_navigates_to_confirmation(form, backend, sample_job):
    """Test that the payload is posted and a confirmation route is returned."""
    backend.route("POST", PRIMARY, created("app-42"))

    result = await form.submit()

    assert result.ok
    assert result.application_id == "app-42"
    assert not result.used_fallback
    assert result.notice is None
    assert result.navigation.path == f"/jobs/{sample_job.id}/application-success"
    assert result.navigation.params == {"applicationId": "app-42"}

    request = backend.calls(PRIMARY)[0]
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {
        "jobId": sample_job.id,
        "fullName": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "resume": "cv.pdf",
        "coverLetter": "",
    }

@pytest.mark.asyncio
async def test_fallback_used_on_connection_error(form, backend, log_events):
    """Test the primary-down scenario: fallback result, notice shown."""
    backend.route("POST", PRIMARY, connection_refused)
    backend.route("POST", FALLBACK, created("x1"))

    result = await form.submit()

    assert result.ok
    assert result.application_id == "x1"
    assert result.used_fallback
    assert result.notice == TEST_MODE_NOTICE
    assert result.navigation.params == {"applicationId": "x1", "testMode": "true"}
    assert backend.calls(PRIMARY)[0].content == backend.calls(FALLBACK)[0].content
    assert "submit.primary_failed" in log_events()
    assert "submit.fallback_used" in log_events()

@pytest.mark.asyncio
async def test_callback_receives_application_id(sample_job, http, config, backend):
    """Test that a supplied callback replaces navigation."""
    backend.route("POST", PRIMARY, connection_refused)
    backend.route("POST", FALLBACK, created("x1"))
    on_success = MagicMock()
    form = ApplicationForm(sample_job, http, config=config, on_success=on_success)
    form.data.full_name = "Jane Doe"
    form.data.email = "jane@example.com"
    form.data.phone = "555"
    form.data.resume = "cv.pdf"

    result = await form.submit()

    on_success.assert_called_once_with("x1")
    assert result.navigation is None
    assert result.notice == TEST_MODE_NOTICE

@pytest.mark.asyncio
async def test_async_callback_is_awaited(form, backend):
    backend.route("POST", PRIMARY, created("a9"))
    on_success = AsyncMock()
    form._on_success = on_success

    await form.submit()

    on_success.assert_awaited_once_with("a9")

@pytest.mark.asyncio
async def test_server_error_is_not_retried(form, backend):
    """Test that a business failure does not trigger the fallback."""
    backend.route("POST", PRIMARY, lambda request: httpx.Response(400, json={"error": "Already applied"}))
    backend.route("POST", FALLBACK, created())

    result = await form.submit()

    assert result.errors == {"submit": "Already applied"}
    assert backend.calls(FALLBACK) == []

@pytest.mark.asyncio
async def test_server_error_without_message(form, backend):
    backend.route("POST", PRIMARY, lambda request: httpx.Response(500, json={}))

    result = await form.submit()

    assert result.errors == {"submit": "Server returned error (500)"}

@pytest.mark.asyncio
async def test_non_json_response(form, backend, log_events):
    """Test that a non-JSON body is rejected without parsing."""
    backend.route("POST", PRIMARY, lambda request: httpx.Response(502, html="<h1>Bad gateway</h1>"))

    result = await form.submit()

    assert result.errors == {"submit": "Server returned non-JSON response (502). Please check server logs."}
    assert "submit.non_json" in log_events()

@pytest.mark.asyncio
async def test_unparsable_json(form, backend):
    backend.route("POST", PRIMARY, lambda request: httpx.Response(
        201, content=b"{not json", headers={"content-type": "application/json"}
    ))

    result = await form.submit()

    assert result.errors == {"submit": "Failed to parse server response. Please try again."}

@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"application": {}}, {"application": {"id": ""}}, {"application": "x1"}, []])
async def test_malformed_success_payload(form, backend, body):
    """Test that a 2xx without application.id is still an error."""
    backend.route("POST", PRIMARY, lambda request: httpx.Response(201, json=body))

    result = await form.submit()

    assert not result.ok
    assert result.errors == {"submit": "Server returned invalid data. Please try again."}

@pytest.mark.asyncio
async def test_both_endpoints_unreachable(form, backend):
    backend.route("POST", PRIMARY, connection_refused)
    backend.route("POST", FALLBACK, connection_refused)

    result = await form.submit()

    assert result.errors == {"submit": SUBMISSION_FAILED}
    assert not form.is_submitting

@pytest.mark.asyncio
async def test_resubmission_ignored_while_in_flight(form, backend):
    """Test that only one request is outstanding per form."""
    release = asyncio.Event()

    async def slow(request):
        await release.wait()
        return httpx.Response(201, json={"application": {"id": "x1"}})

    backend.route("POST", PRIMARY, slow)

    first = asyncio.create_task(form.submit())
    while not backend.requests:
        await asyncio.sleep(0)

    assert form.is_submitting
    second = await form.submit()
    assert second.errors == {"submit": SUBMISSION_IN_PROGRESS}

    release.set()
    result = await first
    assert result.ok
    assert len(backend.calls(PRIMARY)) == 1
    assert not form.is_submitting

@pytest.mark.asyncio
async def test_cancelled_submission_resets_busy_state(form, backend):
    async def hang(request):
        await asyncio.Event().wait()

    backend.route("POST", PRIMARY, hang)

    task = asyncio.create_task(form.submit())
    while not backend.requests:
        await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert not form.is_submitting

def test_set_field_clears_only_its_error(form):
    form.errors = {"email": "Email is invalid", "phone": "Phone number is required"}
    form.set_field("email", "new@example.com")
    assert form.errors == {"phone": "Phone number is required"}

def test_set_unknown_field(form):
    with pytest.raises(ValueError):
        form.set_field("salary", "lots")
