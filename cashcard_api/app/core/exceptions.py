"""Domain errors raised by the service layer."""


class CashCardError(Exception):
    """Base class for errors raised by CashCard services."""


class CardNotFoundError(CashCardError):
    """No card with this id is visible to the caller.

    Raised both when the id does not exist and when it belongs to a
    different owner; callers cannot tell the two cases apart.
    """

    def __init__(self, card_id: int) -> None:
        super().__init__(f"Card {card_id} not found")
        self.card_id = card_id
