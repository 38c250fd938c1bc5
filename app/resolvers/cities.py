import strawberry
from strawberry.types import Info

from app.inputs import CityCreateInput, CityDeleteInput, CityUpdateInput, to_schema
from app.services import city_service
from app.types import CityType


@strawberry.type
class CityQuery:
    @strawberry.field
    async def city(self, info: Info, id: int) -> CityType | None:
        return await city_service.get_city(info.context["db"], id)

    @strawberry.field
    async def city_list(
        self,
        info: Info,
        text_filter: str = "",
        page: int = 1,
        paging: int | None = None,
    ) -> list[CityType]:
        return await city_service.list_cities(info.context["db"], text_filter, page, paging)


@strawberry.type
class CityMutation:
    @strawberry.mutation
    async def city_create(self, info: Info, data: CityCreateInput) -> CityType:
        return await city_service.create_city(info.context["db"], to_schema(data))

    @strawberry.mutation
    async def city_update(self, info: Info, data: CityUpdateInput) -> CityType:
        return await city_service.update_city(info.context["db"], to_schema(data))

    @strawberry.mutation
    async def city_delete(self, info: Info, data: CityDeleteInput) -> int:
        return await city_service.delete_city(info.context["db"], to_schema(data))
