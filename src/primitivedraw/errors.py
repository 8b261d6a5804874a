"""
Exception types for primitivedraw.

Library code raises these; only the CLI turns them into exit codes.
"""


class PrimitiveDrawError(Exception):
    """Base class for all primitivedraw errors."""


class GenerationExhausted(PrimitiveDrawError):
    """
    Raised when a shape cannot be brought into a valid state.

    Signals that a family's validity rule is unsatisfiable for the canvas
    size and border extension in use. Not recoverable by retrying.
    """

    def __init__(self, family, attempts):
        self.family = family
        self.attempts = attempts
        super().__init__(
            f"{family}: no valid mutation found after {attempts} attempts"
        )


class UnsupportedFormatError(PrimitiveDrawError, ValueError):
    """Raised for an output path whose extension has no writer."""


class UnknownShapeFamilyError(PrimitiveDrawError, ValueError):
    """Raised for a shape selector string that names no family."""
