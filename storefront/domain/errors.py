# storefront/domain/errors.py
"""
Bledy domenowe. Kazdy niesie status HTTP, handler w main.py
zamienia je na {"error": message}.
"""


class ShopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShopError):
    status_code = 400


class AuthError(ShopError):
    status_code = 401


class CredentialsError(AuthError):
    """Nieudany login, ten sam komunikat dla zlego loginu i zlego hasla."""

    status_code = 400


class NotFoundError(ShopError):
    status_code = 404


class StoreError(ShopError):
    status_code = 500


class StoreTimeoutError(StoreError):
    status_code = 504
