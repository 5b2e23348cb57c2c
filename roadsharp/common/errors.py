"""
Exception types raised by the rules and roadmap engines.

Contract violations are rejected at the call boundary and leave the engine
untouched. Shoe exhaustion is kept apart from rule errors so the caller can
decide whether to end the shoe. Consistency errors mean an internal
invariant broke and are never corrected silently.
"""


class RoadsharpError(Exception):
    """Base class for all roadsharp errors."""

    pass


class ContractViolationError(RoadsharpError, ValueError):
    """Raised when a caller passes input that breaks an engine contract."""

    pass


class InvalidHandError(ContractViolationError):
    """Raised when an initial hand does not hold exactly two cards."""

    pass


class OutOfOrderRoundError(ContractViolationError):
    """Raised when an outcome's round number is negative, duplicated or out of order."""

    pass


class InvalidRoundNumberError(ContractViolationError):
    """Raised when an outcome's round number is not an integer."""

    pass


class ShoeExhaustedError(RoadsharpError):
    """Raised when a card source has no more cards to deal."""

    pass


class RoadmapConsistencyError(RoadsharpError):
    """Raised when a roadmap invariant is found broken."""

    pass
