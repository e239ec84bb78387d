"""
Top-level router.

This router aggregates the domain routers (accounts, bookings,
messages, ratings).  Each endpoint module declares its full paths, so
no prefixes are applied here.
"""

from fastapi import APIRouter

from .endpoints import bookings, messages, ratings, users

router = APIRouter()

router.include_router(users.router, tags=["users"])
router.include_router(bookings.router, tags=["bookings"])
router.include_router(messages.router, tags=["messages"])
router.include_router(ratings.router, tags=["ratings"])
