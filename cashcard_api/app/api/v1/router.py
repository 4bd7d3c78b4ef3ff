"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers.  When new endpoints are
added or new domains are introduced, update this file to include
their routers.
"""

from fastapi import APIRouter

from .endpoints import cards, customers, greetings

router = APIRouter()

router.include_router(greetings.router, tags=["greetings"])
router.include_router(cards.router, prefix="/cards", tags=["cards"])
# Older clients address cards under ``/cashcards``.  The same router is
# mounted there too; both prefixes expose identical endpoints and
# Location headers follow the prefix of the request.
router.include_router(cards.router, prefix="/cashcards", tags=["cards"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])
