"""Pydantic models for submitted HTML forms."""

from datetime import date

from pydantic import BaseModel, ValidationError, field_validator

from snap_market.domain.models import ROLE_CLIENT, ROLES
from snap_market.domain.photographers import (
    PhotographerProfile,
    PhotographerProfileFields,
)
from snap_market.services.profiles import parse_optional_int


class SignInForm(BaseModel):
    """Sign-in form payload."""

    email: str
    password: str


class SignUpForm(BaseModel):
    """Sign-up form payload."""

    full_name: str
    email: str
    password: str
    role: str = ROLE_CLIENT

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        if value not in ROLES:
            raise ValueError("Choose either client or photographer.")
        return value

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters.")
        return value


class BookingForm(BaseModel):
    """Booking request form payload."""

    service_type: str
    preferred_date: date
    message: str

    @field_validator("service_type", "message")
    @classmethod
    def _required_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("This field is required.")
        return value.strip()

    @field_validator("preferred_date")
    @classmethod
    def _not_in_past(cls, value: date) -> date:
        if value < date.today():
            raise ValueError("Preferred date cannot be in the past.")
        return value


class PhotographerProfileForm(BaseModel):
    """Photographer profile setup form payload; numbers stay raw text."""

    bio: str = ""
    location: str = ""
    city: str = ""
    specialty: str = ""
    hourly_rate: str = ""
    years_experience: str = ""

    @classmethod
    def from_profile(
        cls, profile: PhotographerProfile | None
    ) -> "PhotographerProfileForm":
        """Prefill the form from a stored profile."""
        if profile is None:
            return cls()
        return cls(
            bio=profile.bio or "",
            location=profile.location or "",
            city=profile.city or "",
            specialty=profile.specialty or "",
            hourly_rate=_text(profile.hourly_rate),
            years_experience=_text(profile.years_experience),
        )

    def missing_required(self) -> str | None:
        """Return the label of the first blank required field, if any."""
        for label, value in (
            ("City", self.city),
            ("Location/Region", self.location),
            ("Bio", self.bio),
        ):
            if not value.strip():
                return label
        return None

    def to_fields(self) -> PhotographerProfileFields:
        """Convert to profile fields, parsing the numeric inputs."""
        return PhotographerProfileFields(
            bio=self.bio,
            location=self.location,
            city=self.city,
            specialty=self.specialty,
            hourly_rate=parse_optional_int(self.hourly_rate, "Hourly rate"),
            years_experience=parse_optional_int(
                self.years_experience, "Years of experience"
            ),
        )


def form_error_message(exc: ValidationError) -> str:
    """Return a readable message for the first invalid form field."""
    errors = exc.errors()
    if not errors:
        return "Please check the form and try again."
    message = str(errors[0].get("msg", ""))
    return message.removeprefix("Value error, ") or "Please check the form."


def _text(value: int | None) -> str:
    return "" if value is None else str(value)
