class FaqBotError(Exception):
    """Base class for recoverable bot errors."""


class StoreReadFailure(FaqBotError):
    """Active FAQs could not be fetched."""


class StoreWriteFailure(FaqBotError):
    """A conversation or feedback record could not be stored."""


class DispatchFailure(FaqBotError):
    """A Slack message or reaction could not be posted."""
