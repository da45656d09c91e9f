"""
Custom exceptions for the ytreader application.

This module defines the error taxonomy shared by the extraction pipeline
and the fleet orchestrator: invalid identifiers, transient network
failures, unavailable content, missing load-bearing fields in third-party
responses, and conflicting worker group launches.
"""

from __future__ import annotations


class YtReaderError(Exception):
    """Base exception for all ytreader errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize YtReaderError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class ValidationError(YtReaderError):
    """
    Exception raised when a malformed identifier reaches a public entry point.

    Validation errors signal a caller mistake and are never retried.

    Attributes
    ----------
    message : str
        Human-readable error message.
    field_name : str | None
        The name of the argument that failed validation.
    invalid_value : object
        The value that failed validation.

    Examples
    --------
    >>> try:
    ...     await scraper.get_channel("not-a-channel")
    ... except ValidationError as e:
    ...     print(f"Invalid {e.field_name}: {e.invalid_value}")
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_name: str | None = None,
        invalid_value: object = None,
    ) -> None:
        """
        Initialize ValidationError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Validation failed").
        field_name : str | None, optional
            The name of the argument that failed validation (default: None).
        invalid_value : object, optional
            The value that failed validation (default: None).
        """
        self.field_name: str | None = field_name
        self.invalid_value: object = invalid_value
        super().__init__(message)


class FormatError(ValidationError):
    """Raised when a video ID cannot be parsed out of a URL."""

    def __init__(self, value: str) -> None:
        super().__init__(
            message=f"Could not parse video ID from given string [{value}].",
            field_name="video_url",
            invalid_value=value,
        )


class NetworkError(YtReaderError):
    """
    Exception raised for transient network failures that outlived retries.

    Wraps transport-level errors such as connection failures and timeouts
    once the retry budget of the fetcher is exhausted.

    Attributes
    ----------
    message : str
        Human-readable error message.
    original_error : Exception | None
        The last exception raised by the wrapped operation.
    retry_count : int
        Number of attempts made before giving up.
    """

    def __init__(
        self,
        message: str = "Network error occurred",
        original_error: Exception | None = None,
        retry_count: int = 0,
    ) -> None:
        """
        Initialize NetworkError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Network error occurred").
        original_error : Exception | None, optional
            The original exception that caused this error (default: None).
        retry_count : int, optional
            Number of attempts made (default: 0).
        """
        self.original_error = original_error
        self.retry_count = retry_count
        super().__init__(message)


class UnavailableContentError(YtReaderError):
    """
    Exception raised when a video reports an error playability status.

    Server-declared unavailability does not change on retry, so this is
    fatal for the single extraction that raised it.

    Attributes
    ----------
    message : str
        Human-readable error message.
    video_id : str
        The video that is unavailable.
    reason : str | None
        The reason reported by the player response, when present.
    """

    def __init__(self, video_id: str, reason: str | None = None) -> None:
        """
        Initialize UnavailableContentError.

        Parameters
        ----------
        video_id : str
            The video that is unavailable.
        reason : str | None, optional
            Reason string from the playability status (default: None).
        """
        self.video_id = video_id
        self.reason = reason
        message = f"Video [{video_id}] is unavailable."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class ParseError(YtReaderError):
    """
    Exception raised when a load-bearing field is missing from a response.

    Optional fields fall back to documented defaults instead; only fields
    without which the record is meaningless (titles, upload dates, the
    embedded player response) raise this.

    Attributes
    ----------
    message : str
        Human-readable error message.
    field_name : str | None
        The missing or malformed field.
    source : str | None
        Which third-party response the field was expected in.
    """

    def __init__(
        self,
        message: str = "Failed to parse response",
        field_name: str | None = None,
        source: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.source = source
        super().__init__(message)


class ConflictError(YtReaderError):
    """
    Exception raised when launching a worker group that is still running.

    Attributes
    ----------
    message : str
        Human-readable error message.
    group_name : str
        Name of the conflicting container group.
    state : str | None
        The state reported for the existing group.

    Examples
    --------
    >>> try:
    ...     await orchestrator.start(["update", "-t", "standard"])
    ... except ConflictError as e:
    ...     print(f"{e.group_name} is {e.state}")
    ...     raise typer.Exit(EXIT_CODE_CONFLICT)
    """

    def __init__(self, group_name: str, state: str | None = None) -> None:
        """
        Initialize ConflictError.

        Parameters
        ----------
        group_name : str
            Name of the conflicting container group.
        state : str | None, optional
            The state reported for the existing group (default: None).
        """
        self.group_name = group_name
        self.state = state
        super().__init__(
            f"Won't start container group '{group_name}' - it's not terminated "
            f"(state: {state})"
        )


class FleetLaunchError(YtReaderError):
    """
    Exception raised when one or more groups of a fleet failed to launch.

    Attributes
    ----------
    message : str
        Human-readable error message.
    failures : dict[str, str]
        Group name to failure reason for every group that failed.
    """

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = failures
        super().__init__(
            f"{len(failures)} container group(s) failed to launch: "
            + ", ".join(sorted(failures))
        )


# Exit codes for CLI integration
EXIT_CODE_SUCCESS = 0
EXIT_CODE_GENERAL_ERROR = 1
EXIT_CODE_INVALID_ARGS = 2
EXIT_CODE_CONFLICT = 3
EXIT_CODE_NETWORK_ERROR = 4
EXIT_CODE_INTERRUPTED = 130  # Standard Unix signal interrupt exit code
