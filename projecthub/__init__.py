"""
ProjectHub - multi-tenant project and task tracking API.
"""
