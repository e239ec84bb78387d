"""
Pydantic schema definitions for API payloads.

Each domain (users, bookings, messages, ratings) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from the persisted JSON records to decouple API
representation from storage.
"""
