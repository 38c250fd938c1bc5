"""
Message-coded domain errors.

Every error raised to an API caller carries a message code such as
``user:validate:notUniqueUserName``.  The code is looked up in
``MESSAGE_CODES`` to obtain an HTTP-like status and a human readable
message.  ``extensions`` is picked up by graphql-core when the error is
wrapped, so GraphQL clients receive the code under ``errors[].extensions``.
"""

MESSAGE_CODES: dict[str, tuple[int, str]] = {
    # Generic request errors
    "request:badRequest": (400, "Bad request"),
    "request:validate:invalidInput": (400, "Invalid input"),
    "request:entity:notFound": (404, "Entity not found"),
    "request:version:conflict": (409, "Entity was modified by another request"),
    # User
    "user:validate:notUniqueUserName": (409, "User name is already taken"),
    "user:create:unableToCreateUser": (400, "Unable to create user"),
    "user:update:unableToUpdateUser": (400, "Unable to update user"),
    # City
    "city:validate:notUniqueCityName": (409, "City name is already taken"),
    "city:create:unableToCreateCity": (400, "Unable to create city"),
    "city:update:unableToUpdateCity": (400, "Unable to update city"),
    # Social status
    "socialStatus:validate:notUniqueSocialStatusName": (
        409,
        "Social status name is already taken",
    ),
    "socialStatus:create:unableToCreateSocialStatus": (400, "Unable to create social status"),
    "socialStatus:update:unableToUpdateSocialStatus": (400, "Unable to update social status"),
    # Customer
    "customer:create:unableToCreateCustomer": (400, "Unable to create customer"),
    "customer:update:unableToUpdateCustomer": (400, "Unable to update customer"),
}

_UNKNOWN_CODE = (500, "Internal error")


class MessageCodeError(Exception):
    """Base class for every error that is safe to show to API callers."""

    def __init__(self, code: str) -> None:
        self.code = code
        self.status, self.message = MESSAGE_CODES.get(code, _UNKNOWN_CODE)
        super().__init__(self.message)

    @property
    def extensions(self) -> dict:
        return {"code": self.code, "status": self.status}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r})"


class BadRequestError(MessageCodeError):
    def __init__(self) -> None:
        super().__init__("request:badRequest")


class EntityNotFoundError(MessageCodeError):
    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__("request:entity:notFound")


class VersionConflictError(MessageCodeError):
    """The caller's version no longer matches the stored row."""

    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__("request:version:conflict")


class NotUniqueError(MessageCodeError):
    pass
