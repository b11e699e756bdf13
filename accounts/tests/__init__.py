"""
Accounts App Tests

This package contains tests for:
- test_permissions.py: role checks, assignee checks, object-level permissions
"""
