import strawberry
from strawberry.types import Info

from app.inputs import UserCreateInput, UserDeleteInput, UserUpdateInput, to_schema
from app.schemas import UserFindArgs
from app.services import user_role_service, user_service
from app.types import UserRoleType, UserType


@strawberry.type
class UserQuery:
    @strawberry.field
    async def user(self, info: Info, id: int) -> UserType | None:
        return await user_service.get_user(info.context["db"], id)

    @strawberry.field
    async def user_list(
        self,
        info: Info,
        text_filter: str = "",
        page: int = 1,
        paging: int | None = None,
    ) -> list[UserType]:
        return await user_service.list_users(info.context["db"], text_filter, page, paging)

    @strawberry.field
    async def users_find(
        self,
        info: Info,
        ids: list[int] | None = None,
        usernames: list[str] | None = None,
    ) -> list[UserType]:
        args = UserFindArgs(ids=ids or [], usernames=usernames or [])
        return await user_service.find_users(info.context["db"], args)

    @strawberry.field
    async def user_role_list(self, info: Info) -> list[UserRoleType]:
        return await user_role_service.list_user_roles(info.context["db"])


@strawberry.type
class UserMutation:
    @strawberry.mutation
    async def user_create(self, info: Info, data: UserCreateInput) -> UserType:
        return await user_service.create_user(info.context["db"], to_schema(data))

    @strawberry.mutation
    async def user_update(self, info: Info, data: UserUpdateInput) -> UserType:
        return await user_service.update_user(info.context["db"], to_schema(data))

    @strawberry.mutation
    async def user_delete(self, info: Info, data: UserDeleteInput) -> int:
        return await user_service.delete_user(info.context["db"], to_schema(data))
