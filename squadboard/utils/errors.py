from collections.abc import Iterator
from contextlib import contextmanager
from enum import auto

from asyncpg.exceptions import UniqueViolationError

from squadboard.utils.types import EnumAutoStr


class ListingValidationError(ValueError):
    """A listing or finalize payload is malformed or incomplete."""


class ActiveListingExistsError(ValueError):
    def __init__(self) -> None:
        super().__init__(
            "You can only have one listing at a time. "
            "Delete your existing listing before posting a new one."
        )


class ListingNotOpenError(ValueError):
    pass


class ApplicationError(ValueError):
    pass


class DuplicateApplicationError(ApplicationError):
    def __init__(self) -> None:
        super().__init__("You have already applied to this listing")


class FinalizeError(ValueError):
    pass


class DuplicatePlayStyleTagError(ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Play style tag already exists: {name}")


class StatSourceError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UniqueIndex(EnumAutoStr):
    ix_listings_one_open_per_owner = auto()


unique_index_violation_error_lookup: dict[UniqueIndex, type[ValueError]] = {
    UniqueIndex.ix_listings_one_open_per_owner: ActiveListingExistsError,
}


@contextmanager
def check_unique_constraint_violation(expected_violations: set[UniqueIndex]) -> Iterator[None]:
    try:
        yield
    except UniqueViolationError as exc:
        constraint_name = getattr(exc, "constraint_name", None)
        for violation in expected_violations:
            if constraint_name == violation.value and violation in unique_index_violation_error_lookup:
                raise unique_index_violation_error_lookup[violation]() from exc
        raise
