"""
Authorization rules for blog posts.

Anyone may list and read published posts. Drafts are visible only to
their author and to administrators. Authors and administrators may
write posts, and only the owner or an administrator may change or
delete one.
"""

from __future__ import annotations

import logging

from blogauthz.policies.base import PolicyAction, RecordPolicy, Scope
from blogauthz.types import Blog, Role

logger = logging.getLogger(__name__)


class BlogAction(PolicyAction):
    """Actions guarded by BlogPolicy."""

    INDEX = "index"
    SHOW = "show"
    NEW = "new"
    CREATE = "create"
    EDIT = "edit"
    UPDATE = "update"
    DESTROY = "destroy"
    VIEW_PUBLISHED = "view_published"

    @classmethod
    def aliases(cls) -> dict[str, str]:
        return {"list": "index", "view": "show"}


class BlogPolicy(RecordPolicy[Blog]):
    """
    Policy for blog posts.

    ``record`` may be None for type-level checks (index, new, create).

    Example:
        >>> policy = BlogPolicy(author, draft)
        >>> policy.can(BlogAction.EDIT)
        True
        >>> BlogPolicy(None, draft).check("edit").reason
        'You must be logged in to edit blogs.'
    """

    Action = BlogAction

    def owns_blog(self) -> bool:
        """Check if the actor created the record."""
        if self.actor is None or self.record is None:
            return False
        return self.actor.id == self.record.owner_id

    def can_index(self) -> bool:
        return True

    def can_show(self) -> bool:
        if self.record is not None and self.record.published:
            return True
        return self.owns_blog() or self.admin

    def can_new(self) -> bool:
        return self.author_or_admin

    def can_create(self) -> bool:
        return self.can_new()

    def can_edit(self) -> bool:
        return self.authenticated and (self.owns_blog() or self.admin)

    def can_update(self) -> bool:
        return self.can_edit()

    def can_destroy(self) -> bool:
        return self.can_edit()

    def can_view_published(self) -> bool:
        # The published/draft badge reveals nothing beyond the listing itself
        return True

    rules = {
        BlogAction.INDEX: can_index,
        BlogAction.SHOW: can_show,
        BlogAction.NEW: can_new,
        BlogAction.CREATE: can_create,
        BlogAction.EDIT: can_edit,
        BlogAction.UPDATE: can_update,
        BlogAction.DESTROY: can_destroy,
        BlogAction.VIEW_PUBLISHED: can_view_published,
    }

    def message_for(self, action: PolicyAction | None) -> str:
        if action is BlogAction.SHOW:
            return (
                "This blog is a draft. Drafts are only visible to their "
                "author and to administrators."
            )
        if action in (BlogAction.NEW, BlogAction.CREATE):
            if not self.authenticated:
                return "You must be logged in to create blogs."
            return "Only authors and administrators can create blogs."
        if action in (BlogAction.EDIT, BlogAction.UPDATE):
            if not self.authenticated:
                return "You must be logged in to edit blogs."
            return "You can only edit your own blogs."
        if action is BlogAction.DESTROY:
            if not self.authenticated:
                return "You must be logged in to delete blogs."
            return "You can only delete your own blogs."
        return "You are not authorized to perform this action on blogs."

    class Scope(Scope[Blog]):
        """
        Blogs an actor may list.

        Anonymous visitors and readers see published posts, authors also
        see their own drafts, administrators see everything. Any other
        role falls back to published posts only.
        """

        def resolve(self) -> list[Blog]:
            actor = self.actor
            if actor is None or actor.role is Role.READER:
                return [blog for blog in self.scope if blog.published]
            if actor.role is Role.AUTHOR:
                return [
                    blog for blog in self.scope
                    if blog.published or blog.owner_id == actor.id
                ]
            if actor.role is Role.ADMIN:
                return list(self.scope)

            logger.warning(
                f"BlogPolicy.Scope: unrecognised role {actor.role!r} for actor "
                f"'{actor.id}', showing published blogs only"
            )
            return [blog for blog in self.scope if blog.published]
