"""
Greeting endpoints.

``GET /`` answers with a plain-text banner and ``GET /greeting``
returns a JSON greeting numbered by a counter shared by all requests
of the process.  Both are public.
"""

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from cashcard_api.app.schemas.greeting import Greeting
from cashcard_api.app.services.greeting_service import greeting_service

router = APIRouter()

BANNER = "Greetings from the CashCard API!"


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return BANNER


@router.get("/greeting", response_model=Greeting)
async def greeting(name: str = Query("World")) -> Greeting:
    return greeting_service.greet(name)
