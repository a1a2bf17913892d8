"""
예외 정의
"""


class ShotMatchError(Exception):
    """Base class for shotmatch errors."""


class UnknownJointError(ShotMatchError, ValueError):
    def __init__(self, name):
        super().__init__(f"unknown joint name: {name!r}")
        self.name = name


class InsufficientSequenceError(ShotMatchError):
    """Raised when a performance has too few usable frames to be scored."""

    def __init__(self, label: str, length: int, minimum: int):
        super().__init__(
            f"{label}: only {length} usable frames (need at least {minimum}). "
            "Use a short, clear clip with the full body in frame."
        )
        self.label = label
        self.length = length
        self.minimum = minimum
