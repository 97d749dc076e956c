"""
Structured errors raised by the ledger layer.

The gateway only reports failures as free text, so the text is classified
once, here, and everything above this module works with exception types.
"""


class LedgerError(Exception):
    """Base class for every failure coming out of the ledger layer."""


class LedgerConnectionError(LedgerError):
    """Connection profile, wallet, network, channel or contract failure."""


class IdentityNotFoundError(LedgerError):
    """The wallet holds no identity for the requested role."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(
            f'An identity for the user "{label}" does not exist in the wallet'
        )


class TransactionError(LedgerError):
    """The contract rejected a submitted or evaluated transaction."""


class RecordNotFoundError(TransactionError):
    """The contract reported that the addressed record does not exist."""


class AccessDeniedError(TransactionError):
    """The contract refused the caller's identity."""


NOT_FOUND_MARKER = "does not exist"
ACCESS_DENIED_MARKER = "access denied"


def classify_transaction_error(message: str) -> TransactionError:
    """
    Turn a contract failure message into a typed error.

    Args:
        message: Error text reported by the gateway

    Returns:
        RecordNotFoundError, AccessDeniedError or a plain TransactionError
    """
    if NOT_FOUND_MARKER in message:
        return RecordNotFoundError(message)
    if ACCESS_DENIED_MARKER in message:
        return AccessDeniedError(message)
    return TransactionError(message)
