"""
Data models for job postings and applications.
"""
from enum import Enum
from typing import Dict, List, Optional
from urllib.parse import urlencode
from pydantic import BaseModel, ConfigDict, Field, field_validator


class BackendStatus(str, Enum):
    """Application status as stored by the backend."""
    PENDING = "pending"
    REVIEWED = "reviewed"
    INTERVIEW = "interview"
    REJECTED = "rejected"
    ACCEPTED = "accepted"

class UIStatus(str, Enum):
    """Application status shown on the dashboard."""
    APPLIED = "applied"
    INTERVIEW = "interview"
    REJECTED = "rejected"
    OFFER = "offer"

class StatusFilter(str, Enum):
    """Status tabs on the applications dashboard."""
    ALL = "all"
    APPLIED = "applied"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"

class JobType(str, Enum):
    """Employment type of a job posting."""
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    FREELANCE = "Freelance"
    INTERNSHIP = "Internship"


class WireModel(BaseModel):
    """Base for models exchanged with the backend in camelCase."""
    model_config = ConfigDict(populate_by_name=True)


class JobPost(WireModel):
    """Job posting as listed on the board."""
    id: str = ""
    title: str
    company: str
    location: str
    salary: Optional[str] = None
    type: Optional[JobType] = None
    description: str = ""
    posted_date: str = Field(default="", alias="postedDate")
    logo: Optional[str] = None
    tags: List[str] = []

class JobSummary(WireModel):
    """Job reference nested in a fetched application."""
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    logo: Optional[str] = None

class ApplicationFormData(WireModel):
    """Applicant input collected by the application form."""
    full_name: str = Field(default="", alias="fullName")
    email: str = ""
    phone: str = ""
    resume: str = ""  # chosen file name, no upload
    cover_letter: str = Field(default="", alias="coverLetter")

class Application(WireModel):
    """Submitted application as returned by the backend.

    ``status`` keeps the raw backend string so that values outside
    :class:`BackendStatus`, including null, still map to a dashboard status.
    Display fields may be null; rows substitute placeholders for them.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    job_id: Optional[str] = Field(default=None, alias="jobId")
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    phone: Optional[str] = None
    resume: Optional[str] = None
    cover_letter: Optional[str] = Field(default=None, alias="coverLetter")
    applied_date: Optional[str] = Field(default=None, alias="appliedDate")
    status: Optional[str] = BackendStatus.PENDING.value
    job: Optional[JobSummary] = None

    @field_validator("id", "job_id", mode="before")
    @classmethod
    def _identifier_as_str(cls, value):
        # document ids may arrive as numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

class ApplicationRow(BaseModel):
    """Application projected for the dashboard table."""
    id: str
    title: str
    company: str
    location: str
    status: UIStatus
    date: str

class SavedJob(WireModel):
    """Entry in the user's saved jobs list."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    job_id: str = Field(alias="jobId")
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None


class NavigationCommand(BaseModel):
    """Route change for the caller's router to perform."""
    path: str
    params: Dict[str, str] = {}

    @property
    def url(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"

class SubmissionResult(BaseModel):
    """Outcome of an application submission."""
    ok: bool = False
    application_id: Optional[str] = None
    used_fallback: bool = False
    notice: Optional[str] = None
    navigation: Optional[NavigationCommand] = None
    errors: Dict[str, str] = {}
