"""
GraphQL schema and its FastAPI router.

The request's ``AsyncSession`` comes from the ``get_db`` dependency and
is handed to resolvers as ``info.context["db"]``, so tests can swap the
database with ``app.dependency_overrides[get_db]``.

Errors that are not ``MessageCodeError`` are masked: callers only ever see
message codes or a generic "Bad request".
"""
import logging

import strawberry
from fastapi import Depends
from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter
from strawberry.tools import merge_types

from app.config import settings
from app.database import get_db
from app.errors import MessageCodeError
from app.resolvers.cities import CityMutation, CityQuery
from app.resolvers.customers import CustomerMutation, CustomerQuery
from app.resolvers.social_statuses import SocialStatusMutation, SocialStatusQuery
from app.resolvers.users import UserMutation, UserQuery

logger = logging.getLogger(__name__)

Query = merge_types("Query", (UserQuery, CityQuery, SocialStatusQuery, CustomerQuery))
Mutation = merge_types(
    "Mutation", (UserMutation, CityMutation, SocialStatusMutation, CustomerMutation)
)


def _is_message_coded(error: GraphQLError) -> bool:
    return isinstance(error.original_error, MessageCodeError)


def should_mask_error(error: GraphQLError) -> bool:
    """Mask resolver failures that did not come with a message code."""
    return error.original_error is not None and not _is_message_coded(error)


class RegistrySchema(strawberry.Schema):
    def process_errors(self, errors, execution_context=None) -> None:
        # Coded errors are expected outcomes (conflicts, duplicates), not
        # server faults; keep them out of the error log.
        unexpected = []
        for error in errors:
            if _is_message_coded(error):
                logger.info("GraphQL %s rejected: %s", error.path, error.original_error.code)
            else:
                unexpected.append(error)
        if unexpected:
            super().process_errors(unexpected, execution_context)


schema = RegistrySchema(
    query=Query,
    mutation=Mutation,
    extensions=[
        lambda: MaskErrors(should_mask_error=should_mask_error, error_message="Bad request")
    ],
)


async def get_context(db: AsyncSession = Depends(get_db)) -> dict:
    return {"db": db}


graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.GRAPHQL_IDE else None,
)
