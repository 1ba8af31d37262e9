"""
Blog post endpoints for API v1.

These routes provide CRUD operations for in-memory blog posts.  Besides
the REST verbs, ``POST /{post_id}/edit`` and ``POST /{post_id}/delete``
are accepted for HTML form clients, which can only submit GET and POST.

Validation failures answer ``422`` with the user-facing message and
the offending field.  A failed update also returns the post as it is
currently stored so the edit form can be redisplayed with the last
good values.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from blog_tracker_api.app.api.deps import get_post_service, get_settings
from blog_tracker_api.app.core.config import Settings
from blog_tracker_api.app.core.errors import NotFoundError, ValidationError, ValidationFailedError
from blog_tracker_api.app.schemas.post import PostInput, PostRead, PostSummary
from blog_tracker_api.app.services.post_service import PostService

router = APIRouter()

POST_NOT_FOUND = "Post not found"


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=POST_NOT_FOUND)


@router.get("/", response_model=List[PostSummary])
async def list_posts(
    service: PostService = Depends(get_post_service),
    app_settings: Settings = Depends(get_settings),
) -> List[PostSummary]:
    """Return all posts, newest first, with excerpts and display dates."""
    posts = await service.list_posts()
    return [PostSummary.from_post(post, app_settings.excerpt_length) for post in posts]


@router.post("/", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_in: PostInput,
    service: PostService = Depends(get_post_service),
) -> PostRead:
    """Create a new post.  All of title, author and content are required."""
    try:
        return await service.create_post(post_in.model_dump())
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": e.message, "field": e.field},
        ) from e


@router.get("/{post_id}", response_model=PostRead)
async def get_post(post_id: int, service: PostService = Depends(get_post_service)) -> PostRead:
    """Retrieve a single post.  Returns 404 if it does not exist."""
    post = await service.get_post(post_id)
    if post is None:
        raise _not_found()
    return post


@router.put("/{post_id}", response_model=PostRead)
@router.post("/{post_id}/edit", response_model=PostRead)
async def update_post(
    post_id: int,
    post_in: PostInput,
    service: PostService = Depends(get_post_service),
) -> PostRead:
    """Replace the title, author and content of a post."""
    try:
        return await service.update_post(post_id, post_in.model_dump())
    except NotFoundError as e:
        raise _not_found() from e
    except ValidationFailedError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": e.message,
                "field": e.error.field,
                "post": e.entry.model_dump(mode="json"),
            },
        ) from e


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, service: PostService = Depends(get_post_service)) -> Response:
    """Delete a post."""
    try:
        await service.delete_post(post_id)
    except NotFoundError as e:
        raise _not_found() from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/delete", response_model=PostRead)
async def delete_post_form(post_id: int, service: PostService = Depends(get_post_service)) -> PostRead:
    """Delete a post from an HTML form and return the removed post."""
    try:
        return await service.delete_post(post_id)
    except NotFoundError as e:
        raise _not_found() from e
