"""Error taxonomy for voting-power queries, registry administration and the OTC escrow."""


class PowahError(Exception):
    """
    Base class for all errors raised by doubloon-powah.

    Every subclass carries a short, stable ``reason`` string that callers can
    match on. The message may add detail; the reason never changes.

    Parameters
    ----------
    message : str | None
        Human readable detail. Defaults to the class reason.

    """

    reason: str = "powah error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)
        self.message = message or self.reason


class Unauthorized(PowahError):
    """Caller is not allowed to perform a restricted action."""

    reason = "unauthorized"


class AlreadyExecuted(PowahError):
    """The single-use escrow swap has already run."""

    reason = "swap already executed"


class InsufficientBalance(PowahError):
    """An account or contract holds less than the amount it must move."""

    reason = "insufficient balance"


class InsufficientAllowance(PowahError):
    """Spender has not been approved for the requested amount."""

    reason = "insufficient allowance"


class UpstreamUnavailable(PowahError):
    """
    A read dependency failed or returned malformed data during a query.

    Parameters
    ----------
    source : str
        Label of the failing source (e.g. ``'farm[2]'``, ``'venue_b'``)
    detail : str | None
        What went wrong

    """

    reason = "upstream unavailable"

    def __init__(self, source: str, detail: str | None = None) -> None:
        self.source = source
        message = f"{self.reason}: {source}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidAddress(PowahError):
    """Address is empty or the zero address."""

    reason = "invalid address"


class InvalidSchedule(PowahError):
    """Vesting timestamps are out of order."""

    reason = "invalid vesting schedule"


class VestingNotStarted(PowahError):
    """Claim attempted before the vesting cliff."""

    reason = "not time yet"
