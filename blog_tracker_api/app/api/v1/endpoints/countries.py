"""
Travel tracker endpoints for API v1.

``/visited`` records the countries a user has been to.  Countries are
submitted by name and stored by ISO code; each code can be recorded
once.  ``GET /`` searches the lookup table for name suggestions.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from blog_tracker_api.app.api.deps import get_country_service
from blog_tracker_api.app.core.errors import (
    DuplicateEntryError,
    NotFoundError,
    UnknownCountryError,
    ValidationError,
    ValidationFailedError,
)
from blog_tracker_api.app.schemas.country import (
    CountryInput,
    CountryRead,
    VisitedCountryList,
    VisitedCountryRead,
)
from blog_tracker_api.app.services.country_service import VisitedCountryService

router = APIRouter()

VISITED_NOT_FOUND = "Visited country not found"


@router.get("/", response_model=List[CountryRead])
async def search_countries(
    q: str = Query("", max_length=100),
    limit: int = Query(10, ge=1, le=100),
    service: VisitedCountryService = Depends(get_country_service),
) -> List[CountryRead]:
    """Search the country lookup table by (partial) name."""
    return await service.search_countries(q, limit=limit)


@router.get("/visited", response_model=VisitedCountryList)
async def list_visited(service: VisitedCountryService = Depends(get_country_service)) -> VisitedCountryList:
    """Return the visited country codes, their total and full records."""
    entries = await service.list_visited()
    codes = [entry.country_code for entry in entries]
    return VisitedCountryList(countries=codes, total=len(codes), entries=entries)


@router.post("/visited", response_model=VisitedCountryRead, status_code=status.HTTP_201_CREATED)
async def add_visited(
    country_in: CountryInput,
    service: VisitedCountryService = Depends(get_country_service),
) -> VisitedCountryRead:
    """Mark a country as visited.

    - **422** if the name is missing or blank.
    - **404** if no country matches the name.
    - **409** if the country is already recorded.
    """
    try:
        return await service.add_visited(country_in.model_dump())
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": "Please enter a valid country name.", "field": e.field},
        ) from e
    except UnknownCountryError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except DuplicateEntryError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e


@router.get("/visited/{visited_id}", response_model=VisitedCountryRead)
async def get_visited(
    visited_id: int,
    service: VisitedCountryService = Depends(get_country_service),
) -> VisitedCountryRead:
    visited = await service.get_visited(visited_id)
    if visited is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=VISITED_NOT_FOUND)
    return visited


@router.put("/visited/{visited_id}", response_model=VisitedCountryRead)
async def update_visited(
    visited_id: int,
    country_in: CountryInput,
    service: VisitedCountryService = Depends(get_country_service),
) -> VisitedCountryRead:
    """Change which country a visited record points at."""
    try:
        return await service.update_visited(visited_id, country_in.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=VISITED_NOT_FOUND) from e
    except ValidationFailedError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Please enter a valid country name.",
                "field": e.error.field,
                "visited": e.entry.model_dump(mode="json"),
            },
        ) from e
    except UnknownCountryError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except DuplicateEntryError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e


@router.delete("/visited/{visited_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_visited(
    visited_id: int,
    service: VisitedCountryService = Depends(get_country_service),
) -> Response:
    try:
        await service.delete_visited(visited_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=VISITED_NOT_FOUND) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
