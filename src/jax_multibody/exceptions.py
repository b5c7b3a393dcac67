"""Exceptions raised by jax_multibody.

Every error also derives from ValueError so callers that only guard against
bad arguments keep working.
"""


class MultiBodyError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(MultiBodyError, ValueError):
    """Malformed identity or misuse of the tree builder."""


class IncompatibleTreeError(MultiBodyError, ValueError):
    """Two rigid-bodies do not belong to the same multi-body system."""

    def __init__(self, first_root, second_root):
        self.first_root = first_root
        self.second_root = second_root
        super().__init__(
            "The two rigid-bodies are not part of the same multi-body system: "
            f"first root: {first_root.name}, second root: {second_root.name}"
        )


class PreconditionViolationError(MultiBodyError, ValueError):
    """Caller-supplied arguments are inconsistent with each other."""


class ReferenceFrameMismatchError(MultiBodyError, ValueError):
    """Spatial quantities expressed in different frames were combined."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Frame mismatch: expected {expected}, got {actual}")
