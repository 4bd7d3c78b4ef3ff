from pydantic import BaseModel


class Greeting(BaseModel):
    """A numbered greeting; ``id`` grows by one with every request."""

    id: int
    content: str
