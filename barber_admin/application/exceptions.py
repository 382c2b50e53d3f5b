class BackendUpstreamError(RuntimeError):
    """Raised when the barbershop backend fails (timeouts, network errors, non-2xx responses)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BackendContractError(RuntimeError):
    """Raised when the backend answers with a payload of the wrong shape."""
    pass


class BookingNotFoundError(LookupError):
    """Raised when an action targets a booking that is not in the loaded collection."""
    pass


class FormValidationError(ValueError):
    """Raised before submission when a form has invalid fields. Nothing is sent to the backend."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = dict(errors)
