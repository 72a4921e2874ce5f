"""Administrator routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status

from quill.application.usecase.admin import (
    ListAuditEventsRequest,
    ListAuditEventsResponse,
    ListAuditEventsUseCase,
)
from quill.application.usecase.auth import GetCurrentUserUseCase
from quill.domain.error import AuthorizationError, StorageError, ValidationError
from quill.interface.api.errors import storage_failure
from quill.interface.api.session import require_user

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.get("/audit", response_model=ListAuditEventsResponse)
async def list_audit_events(
    list_audit_events_use_case: FromDishka[ListAuditEventsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
    limit: int = Query(default=50, ge=1, le=1000),
    user_id: str | None = None,
) -> ListAuditEventsResponse:
    """Recent security events, newest first.

    Only the administrator account may read the audit log.

    Raises:
        HTTPException: 400 bad user_id, 401 not signed in, 403 not admin
    """
    try:
        requester = await require_user(auth_token, get_current_user_use_case)
    except StorageError as e:
        raise storage_failure(e, "list_audit_events")

    try:
        return await list_audit_events_use_case.execute(
            ListAuditEventsRequest(requester=requester, limit=limit, user_id=user_id)
        )
    except AuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
