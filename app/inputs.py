"""
GraphQL input types generated from the pydantic schemas.

``to_schema`` turns a received input into its pydantic model, which is
what the services accept.  Constraint violations (lengths, ranges) are
reported as ``request:validate:invalidInput``.
"""
import logging

from pydantic import ValidationError
from strawberry.experimental.pydantic import input as pydantic_input

from app import schemas
from app.errors import MessageCodeError

logger = logging.getLogger(__name__)


def to_schema(data):
    try:
        return data.to_pydantic()
    except ValidationError as exc:
        logger.info("Rejected %s: %d validation error(s)", type(data).__name__, exc.error_count())
        raise MessageCodeError("request:validate:invalidInput") from exc


# --- User ---

@pydantic_input(model=schemas.UserCreate, all_fields=True, name="UserCreateInput")
class UserCreateInput:
    pass


@pydantic_input(model=schemas.UserUpdate, all_fields=True, name="UserUpdateInput")
class UserUpdateInput:
    pass


@pydantic_input(model=schemas.UserDelete, all_fields=True, name="UserDeleteInput")
class UserDeleteInput:
    pass


# --- City ---

@pydantic_input(model=schemas.CityCreate, all_fields=True, name="CityCreateInput")
class CityCreateInput:
    pass


@pydantic_input(model=schemas.CityUpdate, all_fields=True, name="CityUpdateInput")
class CityUpdateInput:
    pass


@pydantic_input(model=schemas.CityDelete, all_fields=True, name="CityDeleteInput")
class CityDeleteInput:
    pass


# --- Social status ---

@pydantic_input(model=schemas.SocialStatusCreate, all_fields=True, name="SocialStatusCreateInput")
class SocialStatusCreateInput:
    pass


@pydantic_input(model=schemas.SocialStatusUpdate, all_fields=True, name="SocialStatusUpdateInput")
class SocialStatusUpdateInput:
    pass


@pydantic_input(model=schemas.SocialStatusDelete, all_fields=True, name="SocialStatusDeleteInput")
class SocialStatusDeleteInput:
    pass


# --- Customer ---

@pydantic_input(model=schemas.CustomerCreate, all_fields=True, name="CustomerCreateInput")
class CustomerCreateInput:
    pass


@pydantic_input(model=schemas.CustomerUpdate, all_fields=True, name="CustomerUpdateInput")
class CustomerUpdateInput:
    pass


@pydantic_input(model=schemas.CustomerDelete, all_fields=True, name="CustomerDeleteInput")
class CustomerDeleteInput:
    pass
