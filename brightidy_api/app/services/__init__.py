"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services load
the JSON document through a ``JsonStore``, apply one operation and
write the document back when it changed, raising the errors defined in
``core.errors`` when a rule is violated.
"""
