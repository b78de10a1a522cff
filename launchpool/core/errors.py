"""Exception types for the launchpad engine.

Every rejection is a ``LaunchpadError`` subclass grouped by category, so
callers can catch a whole class of failures (``except ClaimError``) or a
specific one (``except AlreadyClaimed``). ``code`` is the stable wire name.
"""

from __future__ import annotations


class LaunchpadError(Exception):
    """Base class for every typed rejection raised by the engine."""

    default_message = "launchpad operation rejected"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def code(self) -> str:
        return type(self).__name__


# -- Categories ---------------------------------------------------------------

class AuthorityError(LaunchpadError):
    """Caller is not allowed to perform the action."""


class StatusError(LaunchpadError):
    """Operation is invalid for the current pool status."""


class TimeWindowError(LaunchpadError):
    """Operation is outside its time window."""


class ParameterError(LaunchpadError):
    """An input is out of bounds."""


class ArithmeticFault(LaunchpadError):
    """Checked arithmetic failed (overflow, underflow, division by zero)."""


class SignatureError(LaunchpadError):
    """Oracle authorization could not be verified."""


class ClaimError(LaunchpadError):
    """A claim ledger refused to release funds."""


class LiquidityError(LaunchpadError):
    """Not enough liquidity or allocation to proceed."""


class InvariantViolation(LaunchpadError):
    """A post-state violates one or more record invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


# -- Permission ---------------------------------------------------------------

class Unauthorized(AuthorityError):
    default_message = "only the admin can perform this action"


class NotCreator(AuthorityError):
    default_message = "not the creator of this launch pool"


# -- Status -------------------------------------------------------------------

class AlreadyInitialized(StatusError):
    default_message = "global config already initialized"


class NotInitialized(StatusError):
    default_message = "global config not initialized"


class InvalidStatus(StatusError):
    default_message = "invalid status for this operation"


class LaunchNotActive(StatusError):
    default_message = "launch pool is not active"


class NotMigrated(StatusError):
    default_message = "launch pool not migrated"


class InvalidLaunchStatus(StatusError):
    default_message = "invalid launch status"


class PlatformPaused(StatusError):
    default_message = "platform is currently paused"


class PoolNotFound(StatusError):
    default_message = "launch pool not found"


# -- Time ---------------------------------------------------------------------

class NotStarted(TimeWindowError):
    default_message = "launch has not started yet"


class TimeWindowExpired(TimeWindowError):
    default_message = "launch time window has expired"


class TooEarlyToFinalize(TimeWindowError):
    default_message = "too early to finalize"


class InvalidStartTime(TimeWindowError):
    default_message = "start time must not be in the past"


# -- Parameters ---------------------------------------------------------------

class InvalidTargetAmount(ParameterError):
    default_message = "invalid target amount"


class InvalidDuration(ParameterError):
    default_message = "invalid duration"


class InvalidTokenAllocation(ParameterError):
    default_message = "invalid token allocation"


class InvalidPointsAmount(ParameterError):
    default_message = "invalid points amount"


class InsufficientPoints(ParameterError):
    default_message = "insufficient points balance"


class InvalidContribution(ParameterError):
    default_message = "invalid contribution amount"


class InvalidAmount(ParameterError):
    default_message = "invalid amount"


class InvalidConfig(ParameterError):
    default_message = "invalid configuration"


class InvalidStakeDuration(ParameterError):
    default_message = "invalid stake duration"


class CannotStakeZeroTokens(ParameterError):
    default_message = "cannot stake zero tokens"


# -- Arithmetic ---------------------------------------------------------------

class MathOverflow(ArithmeticFault):
    default_message = "math overflow"


class DivisionByZero(ArithmeticFault):
    default_message = "division by zero"


# -- Signature ----------------------------------------------------------------

class InvalidSignature(SignatureError):
    default_message = "invalid signature"


class InvalidInstructionIndex(SignatureError):
    default_message = "invalid instruction index"


# -- Claims -------------------------------------------------------------------

class NothingToClaim(ClaimError):
    default_message = "nothing to claim"


class AlreadyClaimed(ClaimError):
    default_message = "already claimed"


class NoClaimableAmount(ClaimError):
    default_message = "no claimable amount available"


class InsufficientVaultBalance(ClaimError):
    default_message = "insufficient vault balance"


class StakeNotUnlocked(ClaimError):
    default_message = "stake not unlocked yet"


class NoStakeFound(ClaimError):
    default_message = "no stake position found"


# -- Liquidity ----------------------------------------------------------------

class InsufficientLiquidity(LiquidityError):
    default_message = "insufficient liquidity"


class SlippageExceeded(LiquidityError):
    default_message = "swap output below minimum"
