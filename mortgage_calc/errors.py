"""Exceptions raised by the mortgage calculator."""


class LoanInputError(ValueError):
    """Raised when loan parameters fail the precondition check.

    ``field`` names the offending input so callers (CLI, web) can point the
    user at it.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
