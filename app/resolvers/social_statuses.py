import strawberry
from strawberry.types import Info

from app.inputs import (
    SocialStatusCreateInput,
    SocialStatusDeleteInput,
    SocialStatusUpdateInput,
    to_schema,
)
from app.services import social_status_service
from app.types import SocialStatusType


@strawberry.type
class SocialStatusQuery:
    @strawberry.field
    async def social_status(self, info: Info, id: int) -> SocialStatusType | None:
        return await social_status_service.get_social_status(info.context["db"], id)

    @strawberry.field
    async def social_status_list(
        self,
        info: Info,
        text_filter: str = "",
        page: int = 1,
        paging: int | None = None,
    ) -> list[SocialStatusType]:
        return await social_status_service.list_social_statuses(
            info.context["db"], text_filter, page, paging
        )


@strawberry.type
class SocialStatusMutation:
    @strawberry.mutation
    async def social_status_create(
        self, info: Info, data: SocialStatusCreateInput
    ) -> SocialStatusType:
        return await social_status_service.create_social_status(
            info.context["db"], to_schema(data)
        )

    @strawberry.mutation
    async def social_status_update(
        self, info: Info, data: SocialStatusUpdateInput
    ) -> SocialStatusType:
        return await social_status_service.update_social_status(
            info.context["db"], to_schema(data)
        )

    @strawberry.mutation
    async def social_status_delete(self, info: Info, data: SocialStatusDeleteInput) -> int:
        return await social_status_service.delete_social_status(
            info.context["db"], to_schema(data)
        )
