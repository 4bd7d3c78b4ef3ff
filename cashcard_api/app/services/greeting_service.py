"""Numbered greetings served by ``GET /greeting``."""

import threading

from cashcard_api.app.schemas.greeting import Greeting

GREETING_TEMPLATE = "Hello, %s!"


class GreetingService:
    """Builds greetings stamped with a process-wide, increasing counter."""

    def __init__(self) -> None:
        self._counter = 0
        self._lock = threading.Lock()

    def greet(self, name: str = "World") -> Greeting:
        with self._lock:
            self._counter += 1
            greeting_id = self._counter
        return Greeting(id=greeting_id, content=GREETING_TEMPLATE % name)


greeting_service = GreetingService()
