"""Navigation bar: who is signed in, and the sign-out action."""

from sportsnews.application.services import NoticeBoard, SessionStateHolder
from sportsnews.domain.entities import User
from sportsnews.domain.exceptions import RemoteOperationFailedError


class NavbarView:
    def __init__(self, session: SessionStateHolder, notices: NoticeBoard) -> None:
        self._session = session
        self._notices = notices

    @property
    def user(self) -> User | None:
        return self._session.user

    @property
    def shows_admin_link(self) -> bool:
        return self._session.is_authenticated

    async def sign_out(self) -> None:
        try:
            await self._session.sign_out()
        except RemoteOperationFailedError:
            self._notices.error("Could not sign out")
