"""Domain-specific exceptions"""

INVALID_SUFFIX_MESSAGE = "Masukkan minimal 4 digit terakhir nomor HP"
CUSTOMER_NOT_FOUND_MESSAGE = "Data pelanggan tidak ditemukan. Coba periksa kembali."
RETRIEVAL_FAILED_MESSAGE = "Gagal memuat data"
NO_ACTIVE_BILLS_MESSAGE = "Saat ini Anda tidak memiliki cicilan aktif. Terima kasih!"


class DomainException(Exception):
    """Base exception for domain layer.

    ``user_message`` is what the customer sees; ``str(exc)`` is for logs.
    """

    user_message = RETRIEVAL_FAILED_MESSAGE

    def __init__(self, detail: str | None = None, user_message: str | None = None):
        if user_message is not None:
            self.user_message = user_message
        super().__init__(detail or self.user_message)


class ValidationError(DomainException):
    """User input rejected before any store query"""

    user_message = INVALID_SUFFIX_MESSAGE


class NotFoundError(DomainException):
    """No customer matches the lookup"""

    user_message = CUSTOMER_NOT_FOUND_MESSAGE


class RetrievalError(DomainException):
    """Backing store query failed (network, auth, malformed response)"""

    user_message = RETRIEVAL_FAILED_MESSAGE


class InvalidStateError(DomainException):
    """Dashboard transition requested from a state that does not allow it"""

    pass
