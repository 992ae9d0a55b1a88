"""
Exceptions raised while parsing a hand history.
Every one of them is caught by the parser entry point and turned into a ParseFailure.
"""


class HandHistoryError(Exception):
    """Base class for fatal hand history errors."""
    pass


class EmptyHandHistory(HandHistoryError):
    def __init__(self):
        super().__init__("Empty hand history")


class UnexpectedEndOfInput(HandHistoryError):
    def __init__(self):
        super().__init__("Unexpected end of hand history")


class InvalidHeader(HandHistoryError):
    def __init__(self, detail: str):
        super().__init__(f"Invalid header: {detail}")


class InvalidTableInfo(HandHistoryError):
    def __init__(self):
        super().__init__("Invalid table info")


class InvalidCardFormat(HandHistoryError):
    def __init__(self, card: str):
        super().__init__(
            f'Invalid card format: {card}. Expected format: rank + suit (e.g., "As", "Kh")'
        )
        self.card = card
