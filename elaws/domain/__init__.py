"""
e-Gov Law API Domain Layer

Value objects, entities and ports for the e-Gov Law API client.
All domain objects are immutable (frozen dataclasses) with ZERO external dependencies.
"""
