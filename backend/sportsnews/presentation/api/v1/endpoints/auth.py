"""Sign-in, sign-out and session inspection."""

from fastapi import APIRouter, Depends, HTTPException, status

from sportsnews.application.schemas import SessionResponse, SignInRequest, UserResponse
from sportsnews.application.services import SessionStateHolder
from sportsnews.domain.entities import Session
from sportsnews.domain.exceptions import RemoteOperationFailedError, UnauthenticatedError
from sportsnews.infrastructure.dependencies import get_session_holder

router = APIRouter(prefix="/auth", tags=["Auth"])


def _to_response(session: Session | None) -> SessionResponse:
    if session is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(
        authenticated=True,
        user=UserResponse.model_validate(session.user, from_attributes=True),
        access_token=session.access_token,
        refresh_token=session.refresh_token,
    )


@router.get("/session", response_model=SessionResponse)
async def get_session(
    holder: SessionStateHolder = Depends(get_session_holder),
) -> SessionResponse:
    """The session behind the caller's bearer token, if any."""
    return _to_response(holder.session)


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    data: SignInRequest,
    holder: SessionStateHolder = Depends(get_session_holder),
) -> SessionResponse:
    try:
        await holder.sign_in(data.email, data.password)
    except UnauthenticatedError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except RemoteOperationFailedError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return _to_response(holder.session)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    holder: SessionStateHolder = Depends(get_session_holder),
) -> None:
    """Revoke the caller's token. Signing out without a session is a no-op."""
    try:
        await holder.sign_out()
    except RemoteOperationFailedError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
