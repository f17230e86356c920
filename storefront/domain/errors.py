# storefront/domain/errors.py
"""
Bledy domenowe, routery tlumacza je na kody HTTP.
Brak uprawnien to wbudowany PermissionError (403).
"""


class ValidationError(ValueError):
    """Nieprawidlowe dane wejsciowe (400)."""


class NotFoundError(LookupError):
    """Brak pozycji koszyka / zamowienia / modelu (404)."""


class PersistenceError(RuntimeError):
    """Blad bazy danych, transakcja zostala wycofana (500)."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def as_detail(self) -> dict:
        return {"message": self.message, "error": self.detail}
