"""
GraphQL output types.

Resolvers return ORM instances straight from the services; strawberry
reads the attributes named here.  Relationships listed on a type must be
eager-loaded by the service that produced the instance.
"""
import strawberry


@strawberry.type(name="UserRole")
class UserRoleType:
    name: str
    description: str | None


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    username: str
    first_name: str
    second_name: str
    middle_name: str | None
    display_name: str
    user_role_name: str | None
    user_role: UserRoleType | None
    version: int


@strawberry.type(name="City")
class CityType:
    id: strawberry.ID
    city_name: str
    version: int


@strawberry.type(name="SocialStatus")
class SocialStatusType:
    id: strawberry.ID
    social_status_name: str
    version: int


@strawberry.type(name="Customer")
class CustomerType:
    id: strawberry.ID
    first_name: str
    second_name: str
    middle_name: str | None
    display_name: str
    phone: str | None
    email: str | None
    note: str | None
    city_id: int | None
    city: CityType | None
    social_status_id: int | None
    social_status: SocialStatusType | None
    version: int
