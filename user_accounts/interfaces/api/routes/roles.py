"""Routes exposing the role catalogue."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from user_accounts.application.use_cases.roles import list_roles as list_roles_uc
from user_accounts.domain.entities import SessionPrincipal
from user_accounts.infrastructure.database import get_db
from user_accounts.interfaces.api.dependencies import get_current_principal
from user_accounts.interfaces.api.routes_helpers import raise_for_result
from user_accounts.interfaces.api.schemas import RoleRead

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("/", response_model=list[RoleRead])
def list_roles(
    db: Session = Depends(get_db),
    _: SessionPrincipal = Depends(get_current_principal),
):
    """Return the system roles."""

    result = list_roles_uc(db)
    raise_for_result(result)
    return [RoleRead.model_validate(role) for role in result.value]
