"""
blogauthz test suite.

This package contains tests for blogauthz:
- Core types and configuration
- Policy base classes and the registry
- Blog, user, admin and dashboard policies
- The Authorizer and per-request verification
- Payload validation and the decision log
"""
