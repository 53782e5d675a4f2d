"""Fixed-window rate limiter for verification and reset emails.

Keys are ``"{scope}:{normalized email}"`` so the verification and password
reset flows share one table and one algorithm without sharing budgets.

Atomicity:
    The check-and-increment is a single conditional write against the
    record state that was read (compare-and-set on ``first_attempt_at``
    and, for increments, ``attempt_count < cap``). When a concurrent caller
    changes the record between the read and the write, the write matches no
    row and the check starts over. After RATE_LIMIT_MAX_CAS_RETRIES lost
    races the attempt is denied, so contention can never let the cap be
    exceeded.

Usage:
    limiter = EmailRateLimiter(
        rate_limit_repo=repo,
        rule=RateLimitRule(max_attempts=3, window=timedelta(hours=1)),
        scope=VERIFICATION_RATE_LIMIT_SCOPE,
        clock=clock,
        logger=logger,
    )
    decision = await limiter.check("user@example.com")
    if not decision.allowed:
        ...
"""

from src.core.constants import RATE_LIMIT_MAX_CAS_RETRIES
from src.domain.protocols import ClockProtocol, LoggerProtocol, RateLimitRepository
from src.domain.value_objects import RateLimitDecision, RateLimitRule, normalize_email


class EmailRateLimiter:
    """Per-email fixed-window limiter.

    Attributes:
        rule: Cap and window length.
        scope: Key prefix separating independent budgets.
    """

    def __init__(
        self,
        *,
        rate_limit_repo: RateLimitRepository,
        rule: RateLimitRule,
        scope: str,
        clock: ClockProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._repo = rate_limit_repo
        self.rule = rule
        self.scope = scope
        self._clock = clock
        self._logger = logger

    def key_for(self, email: str) -> str:
        """Build the limiter key for an email address."""
        return f"{self.scope}:{normalize_email(email)}"

    async def check(self, email: str) -> RateLimitDecision:
        """Check and consume one attempt for ``email``.

        Rules:
            - No record: create it with counter=1 (allowed)
            - Window elapsed: reset counter=1, window starts now (allowed)
            - Counter below cap: increment (allowed)
            - Counter at cap: denied, record untouched

        Args:
            email: Email address (normalized here).

        Returns:
            RateLimitDecision: allowed flag, attempt count and retry-after.
        """
        key = self.key_for(email)

        for _ in range(RATE_LIMIT_MAX_CAS_RETRIES):
            now = self._clock.now()
            record = await self._repo.find(key)

            if record is None:
                if await self._repo.create_if_absent(key, now):
                    return RateLimitDecision(allowed=True, attempts=1)
                continue

            if self.rule.window_elapsed(record.first_attempt_at, now):
                if await self._repo.reset_window(key, record.first_attempt_at, now):
                    return RateLimitDecision(allowed=True, attempts=1)
                continue

            if record.attempt_count >= self.rule.max_attempts:
                self._logger.info(
                    "rate_limit_denied",
                    scope=self.scope,
                    attempts=record.attempt_count,
                )
                return RateLimitDecision(
                    allowed=False,
                    attempts=record.attempt_count,
                    retry_after_seconds=self.rule.retry_after_seconds(
                        record.first_attempt_at, now
                    ),
                )

            if await self._repo.increment_within_window(
                key, record.first_attempt_at, self.rule.max_attempts, now
            ):
                return RateLimitDecision(
                    allowed=True, attempts=record.attempt_count + 1
                )

        self._logger.warning(
            "rate_limit_contention_denied",
            scope=self.scope,
            retries=RATE_LIMIT_MAX_CAS_RETRIES,
        )
        return RateLimitDecision(allowed=False, attempts=self.rule.max_attempts)
