from datetime import date
from datetime import datetime
from datetime import UTC

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Request
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials

from gitwrapped.api.schemas.wrapped import SearchCountResponse
from gitwrapped.api.schemas.wrapped import WrappedResponse
from gitwrapped.core.security import bearer_scheme
from gitwrapped.core.security import resolve_github_token
from gitwrapped.services.search_counter import SearchCounter
from gitwrapped.services.wrapped_service import MissingInputError
from gitwrapped.services.wrapped_service import UnauthenticatedError
from gitwrapped.services.wrapped_service import UpstreamError
from gitwrapped.services.wrapped_service import UserNotFoundError
from gitwrapped.services.wrapped_service import get_wrapped_data
from gitwrapped.settings import Settings


router = APIRouter()


def get_settings() -> Settings:
    return Settings()


def get_reference_date() -> date:
    """Return today's date in UTC."""

    return datetime.now(UTC).date()


def get_search_counter(request: Request) -> SearchCounter:
    return request.app.state.search_counter


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Hello World"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/api/wrapped", response_model=WrappedResponse)
def get_wrapped(
    username: str | None = Query(default=None, max_length=100),
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    settings: Settings = Depends(get_settings),
    reference_date: date = Depends(get_reference_date),
) -> WrappedResponse:
    """Return the year-in-review payload for a GitHub user."""

    token = resolve_github_token(credentials, settings.github_token)

    try:
        return get_wrapped_data(
            username=username,
            token=token,
            graphql_url=settings.github_graphql_url,
            reference_date=reference_date,
            strict_gaps=settings.streak_strict_gaps,
            timeout=settings.github_timeout_seconds,
        )
    except MissingInputError as exc:
        raise HTTPException(status_code=400, detail="Username is required") from exc
    except UnauthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail="User not found") from exc
    except UpstreamError as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc


@router.get("/api/stats", response_model=SearchCountResponse)
def get_search_count(
    counter: SearchCounter = Depends(get_search_counter),
) -> SearchCountResponse:
    """Return how many wrapped searches this process has seen."""

    return SearchCountResponse(count=counter.value)


@router.post("/api/stats", response_model=SearchCountResponse)
def increment_search_count(
    counter: SearchCounter = Depends(get_search_counter),
) -> SearchCountResponse:
    return SearchCountResponse(count=counter.increment(), success=True)
