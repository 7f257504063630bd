"""Use cases (application operations)."""

from tramites.application.use_cases.analytics import DashboardAggregator
from tramites.application.use_cases.auth import AuthenticationService, LoginResult

__all__ = ["AuthenticationService", "DashboardAggregator", "LoginResult"]
