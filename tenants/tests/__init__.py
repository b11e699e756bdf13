"""
Tenants Test Package

Contains tests for the multi-tenant system:
- Plan and tenant lifecycle
- Tenant resolution middleware
- Tenant context, lookups and audit logging
- Management commands
"""
