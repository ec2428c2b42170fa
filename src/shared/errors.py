"""Error taxonomy shared by the ordering and notifications contexts.

Every error the HTTP surface reports derives from ``MarketplaceError`` and
carries the status code it maps to. The API layer renders them as
``{"error": message, "code": ErrorName}``.
"""


class MarketplaceError(Exception):
    status_code = 400

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__name__

    @property
    def code(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class Unauthenticated(MarketplaceError):
    status_code = 401


class Unauthorized(MarketplaceError):
    status_code = 403


class NotFound(MarketplaceError):
    status_code = 404


class Conflict(MarketplaceError):
    status_code = 409


class InvalidListLimit(MarketplaceError):
    """A page size or page number below one."""
