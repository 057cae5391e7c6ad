"""Services Layer — per-resource handler classes.

Invariants:
    - One handler class per resource, constructed per request with its collaborators
    - Handlers raise StorefrontError subclasses; routes turn them into envelopes
"""
