"""Domain layer - Pure business logic.

This layer contains the entities of the credential and entitlement engine,
value objects, domain errors and protocols (ports). The domain layer has NO
dependencies on any framework or infrastructure - it is pure Python.

Structure:
- entities/: Identities, refresh tokens, plans, subscriptions, usage
- value_objects/: Immutable values (Email, EffectivePlan, UsageLimits)
- enums/: Subscription status, billing cycle, plan source, audit actions
- errors/: Domain-specific error dataclasses
- protocols/: Repository and service interfaces
"""
