"""
Pydantic schema definitions for API payloads.

Each domain (cards, customers, greetings) defines its own Pydantic
models for request and response bodies.  Schemas are separated from
the database layout to decouple API representation from persistence.
"""
