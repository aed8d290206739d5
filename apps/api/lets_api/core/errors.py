"""Application error taxonomy.

Services raise these and never catch them; the HTTP layer maps each kind to a
status code in ``lets_api.main``.
"""

MULTIPLE_DATABASE_RECORDS = "E1020"
RESOURCE_NOT_FOUND = "E1030"
OPERATION_NOT_PERMITTED = "E1040"
SHARED_ACTIVITY_ILLEGAL_ACCESS = "E11010"
PRIVATE_ACTIVITY_ILLEGAL_ACCESS = "E11020"


class LetsApiError(Exception):
    code = "E1001"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NotFoundError(LetsApiError):
    code = RESOURCE_NOT_FOUND


class PermissionDeniedError(LetsApiError):
    code = OPERATION_NOT_PERMITTED


class DataCorruptionError(LetsApiError):
    """A uniqueness invariant is broken in storage, e.g. two like rows for one user."""

    code = MULTIPLE_DATABASE_RECORDS
