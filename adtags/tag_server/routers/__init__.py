"""
AdTags API Routers.

Modules:
    health – Health check
    tags   – Placeholder / footer tag preview
"""
