"""Role-dependent navigation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from identity_api.core.context import RequestContext
from identity_api.core.dependencies import get_message_catalog, get_request_context, require_role
from identity_api.lib.i18n import MessageCatalog
from identity_api.models.user import User, UserRole
from identity_api.schemas.auth import MenuItem, MenuResponse
from identity_api.services.menu_service import menu_for

menu_router = APIRouter(tags=["menu"])


@menu_router.get("/menu", response_model=MenuResponse)
async def get_menu(
    current_user: Annotated[User, Depends(require_role(*UserRole))],
    context: Annotated[RequestContext, Depends(get_request_context)],
    catalog: Annotated[MessageCatalog, Depends(get_message_catalog)],
) -> MenuResponse:
    """Return the navigation entries authorized for the caller's role."""
    return MenuResponse(
        role=current_user.role,
        menus=[
            MenuItem(label=catalog.resolve(entry.label, context.locale), path=entry.path)
            for entry in menu_for(current_user.role)
        ],
    )
