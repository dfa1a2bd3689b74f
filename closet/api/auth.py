"""Identity dependency for routes acting on behalf of a user."""

from fastapi import Depends, Header, HTTPException, status


def require_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """
    Return the id of the authenticated user.

    Token validation happens in the gateway in front of this service, which
    forwards the resolved user id. Owner ids are never read from request
    bodies or query strings.
    """

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return user_id


CurrentUserDependency = Depends(require_user_id)
