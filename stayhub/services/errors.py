"""Domain exceptions raised by the service layer.

Routers translate these at the HTTP boundary (see ``stayhub.main``).
"""

import uuid
from dataclasses import dataclass

APARTMENT_NOT_FOUND = "ApartmentNotFound"
CAPACITY_EXCEEDED = "CapacityExceeded"
DATE_RANGE_UNAVAILABLE = "DateRangeUnavailable"


class NotFoundError(Exception):
    """A requested entity id does not resolve."""

    def __init__(self, entity: str, entity_id: uuid.UUID | str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


@dataclass(frozen=True)
class ValidationIssue:
    """One failed booking constraint."""

    kind: str
    message: str


class BookingValidationError(Exception):
    """A booking request failed one or more pre-commit checks."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__("; ".join(issue.message for issue in issues))

    @property
    def kinds(self) -> list[str]:
        return [issue.kind for issue in self.issues]


class GeocodingError(Exception):
    """The geocoder could not be reached or returned an unusable answer."""
