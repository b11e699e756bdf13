"""
Core - shared infrastructure for ProjectHub

This package provides:
- Abstract base models (tenant ownership, timestamps)
- Secure tenant-scoped ViewSet base classes
"""
