"""Transient user-facing notifications."""

from dataclasses import dataclass

VARIANT_DEFAULT = "default"
VARIANT_DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notice:
    """A toast shown once on the next rendered page."""

    title: str
    description: str
    variant: str = VARIANT_DEFAULT

    @classmethod
    def error(cls, description: str, title: str = "Error") -> "Notice":
        return cls(title=title, description=description, variant=VARIANT_DESTRUCTIVE)

    @classmethod
    def success(cls, description: str, title: str = "Success!") -> "Notice":
        return cls(title=title, description=description)

    @property
    def is_error(self) -> bool:
        return self.variant == VARIANT_DESTRUCTIVE
