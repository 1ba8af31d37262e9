"""
Service layer for blog posts.

Posts live in process memory: an ``EntryStore`` created once per
application and handed to the routers through ``app.state``.  Data
is lost on restart.  Every post requires a ``title``, an ``author``
and ``content``.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from blog_tracker_api.app.core.errors import ValidationFailedError
from blog_tracker_api.app.schemas.post import POST_FIELDS, PostRead
from blog_tracker_api.app.services.entry_store import EntryStore

logger = logging.getLogger(__name__)


class PostService:
    """CRUD operations for blog posts."""

    def __init__(self, store: Optional[EntryStore] = None) -> None:
        self.store = store or EntryStore(POST_FIELDS)

    async def list_posts(self) -> List[PostRead]:
        """Return all posts, newest first."""
        return [PostRead.from_entry(entry) for entry in self.store.list()]

    async def get_post(self, post_id: int) -> Optional[PostRead]:
        entry = self.store.get(post_id)
        if entry is None:
            return None
        return PostRead.from_entry(entry)

    async def create_post(self, fields: Mapping[str, Optional[str]]) -> PostRead:
        """Create a post from raw form fields.

        Raises ``MissingFieldError`` or ``BlankFieldError`` if the
        input is incomplete; nothing is stored in that case.
        """
        entry = self.store.create(fields)
        logger.info("Created post %s", entry.id)
        logger.debug("Total posts in memory: %s", len(self.store))
        return PostRead.from_entry(entry)

    async def update_post(self, post_id: int, fields: Mapping[str, Optional[str]]) -> PostRead:
        """Replace the title, author and content of a post.

        Raises ``NotFoundError`` for an unknown id and
        ``ValidationFailedError`` (carrying the unchanged post) for
        invalid input.
        """
        try:
            entry = self.store.update(post_id, fields)
        except ValidationFailedError as exc:
            logger.info("Rejected update of post %s: %s", post_id, exc.error.field)
            raise ValidationFailedError(PostRead.from_entry(exc.entry), exc.error) from exc
        logger.info("Updated post %s", post_id)
        return PostRead.from_entry(entry)

    async def delete_post(self, post_id: int) -> PostRead:
        """Delete a post and return it.  Raises ``NotFoundError``."""
        entry = self.store.delete(post_id)
        logger.info("Deleted post %s (%d remaining)", post_id, len(self.store))
        return PostRead.from_entry(entry)
