from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer


bearer_scheme = HTTPBearer(auto_error=False)


def resolve_github_token(
    credentials: HTTPAuthorizationCredentials | None,
    default_token: str | None,
) -> str | None:
    """Pick the GitHub token for a request.

    A caller-supplied Bearer token takes precedence over the server token.
    Returns None when neither is available.

    Raises:
        HTTPException: If an Authorization header is present but malformed.
    """

    if credentials is None:
        return default_token.strip() if default_token else None

    if credentials.scheme.lower() != "bearer" or not credentials.credentials.strip():
        raise HTTPException(
            status_code=401,
            detail="Authorization header must carry a Bearer token",
        )

    return credentials.credentials.strip()
