"""Client Interaction Layer — async components that talk to the storefront API.

Invariants:
    - Components hold plain local state; nothing here is process-global
    - All HTTP goes through StorefrontClient

Design Decisions:
    - asyncio components instead of a UI framework: any async host can render them
"""
