"""
Pytest fixtures for blogauthz tests.

Provides the actors and blogs used across test modules. Ids follow the
scenario used throughout: reader 1, author 2, admin 3.
"""

from __future__ import annotations

import pytest

from blogauthz import Actor, Authorizer, AuthorizerConfig, Blog, DecisionLog, Role
from blogauthz.policies.registry import PolicyRegistry, default_registry


# ============================================================================
# Actor Fixtures
# ============================================================================


@pytest.fixture
def reader() -> Actor:
    """Create a reader actor."""
    return Actor(id=1, role=Role.READER, username="johndoe")


@pytest.fixture
def author() -> Actor:
    """Create an author actor who owns the draft and published fixtures."""
    return Actor(id=2, role=Role.AUTHOR, username="janesmith")


@pytest.fixture
def admin() -> Actor:
    """Create an admin actor."""
    return Actor(id=3, role=Role.ADMIN, username="bobwilson")


@pytest.fixture
def other_author() -> Actor:
    """Create a second author who owns nothing in the shared fixtures."""
    return Actor(id=4, role=Role.AUTHOR, username="alicejohnson")


@pytest.fixture
def inactive_admin() -> Actor:
    """Create a deactivated admin actor."""
    return Actor(id=5, role=Role.ADMIN, active=False, username="charliebrown")


# ============================================================================
# Blog Fixtures
# ============================================================================


@pytest.fixture
def draft() -> Blog:
    """Create an unpublished blog owned by the author."""
    return Blog(id=10, owner_id=2, published=False, title="Devise Authentication Deep Dive")


@pytest.fixture
def published() -> Blog:
    """Create a published blog owned by the author."""
    return Blog(id=11, owner_id=2, published=True, title="Getting Started with Ruby on Rails")


@pytest.fixture
def other_draft() -> Blog:
    """Create an unpublished blog owned by the other author."""
    return Blog(id=12, owner_id=4, published=False, title="Docker for Rails Developers")


@pytest.fixture
def other_published() -> Blog:
    """Create a published blog owned by the other author."""
    return Blog(id=13, owner_id=4, published=True, title="CSS Grid vs Flexbox")


@pytest.fixture
def all_blogs(
    draft: Blog, published: Blog, other_draft: Blog, other_published: Blog
) -> list[Blog]:
    """All blogs, in storage order."""
    return [draft, published, other_draft, other_published]


# ============================================================================
# Registry and Authorizer Fixtures
# ============================================================================


@pytest.fixture
def registry() -> PolicyRegistry:
    """Create the application's frozen registry."""
    return default_registry()


@pytest.fixture
def empty_registry() -> PolicyRegistry:
    """Create a fresh, empty, unfrozen registry."""
    return PolicyRegistry()


@pytest.fixture
def decision_log() -> DecisionLog:
    """Create a small decision log."""
    return DecisionLog(max_events=50)


@pytest.fixture
def authorizer(decision_log: DecisionLog) -> Authorizer:
    """Create an Authorizer with the default policies."""
    return Authorizer(decision_log=decision_log)


@pytest.fixture
def permissive_authorizer() -> Authorizer:
    """Create an Authorizer that evaluates inactive actors as they are."""
    config = AuthorizerConfig(treat_inactive_as_anonymous=False, decision_log_size=0)
    return Authorizer(config=config)
