"""Exception hierarchy for funding scan."""


class FundingScanError(Exception):
    """Base exception for all funding scan errors."""


class InvalidRequestError(FundingScanError):
    """Requested assets or exchanges have no supported intersection."""


class ExchangeAPIError(FundingScanError):
    """Exchange returned an error envelope or an unusable payload."""

    def __init__(self, exchange_id: str, message: str) -> None:
        self.exchange_id = exchange_id
        super().__init__(f"{exchange_id}: {message}")
