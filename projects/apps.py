"""
Projects app configuration.

This app manages tenant projects and their tasks, together with the
business rules and derived values that apply to them (see services.py).
"""

from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    """Configuration for the projects app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'projects'
    verbose_name = 'Projects'
