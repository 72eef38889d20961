"""Services Layer — imperative shell around persistence.

Invariants:
    - Services receive their AsyncSession from the caller (request-scoped)
    - Services raise DogProxyError subclasses; routes never catch them
"""
