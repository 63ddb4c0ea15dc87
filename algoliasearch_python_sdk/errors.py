from __future__ import annotations

from httpx import Response


class AlgoliaError(Exception):
    """Generic class for Algolia error handling."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"AlgoliaError. Error message: {self.message}."


class AlgoliaApiError(AlgoliaError):
    """Error sent by the Algolia API."""

    def __init__(self, error: str, response: Response) -> None:
        self.status_code = response.status_code
        self.message = ""
        if response.content:
            self.message = f"{response.json().get('message') or ''}"
        if not self.message:
            self.message = error
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"AlgoliaApiError. Status code: {self.status_code}. Error message: {self.message}"


class AlgoliaCommunicationError(AlgoliaError):
    """Error when connecting to Algolia."""

    def __str__(self) -> str:
        return f"AlgoliaCommunicationError, {self.message}"


class AlgoliaTimeoutError(AlgoliaError):
    """Error when an Algolia operation takes longer than expected."""

    def __init__(self, message: str, task_id: int | str | None = None) -> None:
        self.task_id = task_id
        super().__init__(message)

    def __str__(self) -> str:
        return f"AlgoliaTimeoutError, {self.message}"


class InvalidBatchOperationError(AlgoliaError):
    """Error for batch operations that are missing a required objectID or indexName."""

    def __init__(self, action: str, field: str = "objectID") -> None:
        self.action = action
        self.field = field
        super().__init__(f"{field} is required for a `{action}` batch operation")


class InvalidObjectError(AlgoliaError):
    """Error for objects that are not in a valid format for Algolia."""

    pass


class InvalidParameterTypeError(AlgoliaError):
    def __init__(self, parameter: str, expected: str) -> None:
        self.parameter = parameter
        self.expected = expected
        super().__init__(f"invalid type for `{parameter}`: expected {expected}")


class InvalidRestriction(Exception):
    pass


class NoMoreHitsError(AlgoliaError):
    """Raised when a browse cursor has returned every hit."""

    def __init__(self, message: str = "No more hits") -> None:
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class SettingsDecodeError(AlgoliaError):
    """Error when a settings field comes back in an undocumented shape."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"cannot decode `{field}` from value {value!r}")
