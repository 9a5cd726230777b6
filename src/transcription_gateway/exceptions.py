"""Custom exceptions for the transcription gateway."""


class MissingUploadError(Exception):
    """Raised when the request carries no (or an empty) audio file field."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"No file field '{field_name}' provided")


class BackendError(Exception):
    """Raised when the transcription backend fails or cannot be reached."""

    def __init__(
        self,
        status_code: int | None,
        detail: str,
        cause: Exception | None = None,
    ):
        self.status_code = status_code
        self.detail = detail
        self.cause = cause
        if status_code is None:
            message = f"Transcription backend unreachable: {detail}"
        else:
            message = f"Transcription backend error {status_code}: {detail}"
        super().__init__(message)


class EventPublishError(Exception):
    """Raised when publishing an event to the message broker fails."""

    def __init__(self, routing_key: str, cause: Exception | None = None):
        self.routing_key = routing_key
        self.cause = cause
        super().__init__(f"Failed to publish event with routing key '{routing_key}'")
