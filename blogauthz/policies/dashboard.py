"""
Headless policy for the signed-in dashboard.

Any signed-in actor may open the dashboard and its settings; the author
dashboard and analytics pages are for authors and administrators.
"""

from __future__ import annotations

from blogauthz.policies.base import HeadlessPolicy, PolicyAction


class DashboardAction(PolicyAction):
    """Capabilities of the dashboard."""

    VIEW = "view"
    AUTHOR_DASHBOARD = "author_dashboard"
    ANALYTICS = "analytics"
    SETTINGS = "settings"


class DashboardPolicy(HeadlessPolicy):
    """Policy guarding dashboard pages by authentication and role."""

    Action = DashboardAction

    def can_view(self) -> bool:
        return self.authenticated

    def can_author_dashboard(self) -> bool:
        return self.author_or_admin

    def can_analytics(self) -> bool:
        return self.author_or_admin

    def can_settings(self) -> bool:
        return self.authenticated

    rules = {
        DashboardAction.VIEW: can_view,
        DashboardAction.AUTHOR_DASHBOARD: can_author_dashboard,
        DashboardAction.ANALYTICS: can_analytics,
        DashboardAction.SETTINGS: can_settings,
    }

    def message_for(self, action: PolicyAction | None) -> str:
        if not self.authenticated:
            return "You must be logged in to access the dashboard."
        if action is DashboardAction.AUTHOR_DASHBOARD:
            return "Only authors and administrators can access the author dashboard."
        if action is DashboardAction.ANALYTICS:
            return "Only authors and administrators can view analytics."
        return "You are not authorized to access this part of the dashboard."
