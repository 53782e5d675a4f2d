"""Application layer - Use cases and orchestration.

This layer contains the caller-facing operations following the CQRS pattern:
- Commands: Write operations that change state (register, login, refresh...)
- Queries: Read operations (entitlement checks, usage limits, trial info)
- Services: The engine components the handlers compose (credential tokens,
  verification/reset tokens, rate limiter, subscriptions, quotas, usage)

The application layer orchestrates domain logic through protocols only; it
never imports infrastructure.
"""
