import strawberry
from strawberry.types import Info

from app.inputs import CustomerCreateInput, CustomerDeleteInput, CustomerUpdateInput, to_schema
from app.services import customer_service
from app.types import CustomerType


@strawberry.type
class CustomerQuery:
    @strawberry.field
    async def customer(self, info: Info, id: int) -> CustomerType | None:
        return await customer_service.get_customer(info.context["db"], id)

    @strawberry.field
    async def customer_list(
        self,
        info: Info,
        text_filter: str = "",
        page: int = 1,
        paging: int | None = None,
    ) -> list[CustomerType]:
        return await customer_service.list_customers(
            info.context["db"], text_filter, page, paging
        )


@strawberry.type
class CustomerMutation:
    @strawberry.mutation
    async def customer_create(self, info: Info, data: CustomerCreateInput) -> CustomerType:
        return await customer_service.create_customer(info.context["db"], to_schema(data))

    @strawberry.mutation
    async def customer_update(self, info: Info, data: CustomerUpdateInput) -> CustomerType:
        return await customer_service.update_customer(info.context["db"], to_schema(data))

    @strawberry.mutation
    async def customer_delete(self, info: Info, data: CustomerDeleteInput) -> int:
        return await customer_service.delete_customer(info.context["db"], to_schema(data))
