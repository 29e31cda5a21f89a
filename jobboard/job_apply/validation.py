"""
Client-side checks for the application form.
"""
import re
from typing import Dict

from ..storage.models import ApplicationFormData

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

def validate_application(form: ApplicationFormData) -> Dict[str, str]:
    """Validate applicant input.

    Every failing field is reported, keyed by its wire name. An empty dict
    means the form may be submitted. The cover letter is never checked.
    """
    errors = {}

    if not form.full_name.strip():
        errors["fullName"] = "Full name is required"

    if not form.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(form.email):
        errors["email"] = "Email is invalid"

    if not form.phone.strip():
        errors["phone"] = "Phone number is required"

    if not form.resume:
        errors["resume"] = "Resume is required"

    return errors

def is_valid_object_id(value: str) -> bool:
    """Whether a job id has the backend's document id shape (24 hex chars)."""
    return bool(value) and bool(OBJECT_ID_PATTERN.match(value))
