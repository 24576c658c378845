"""
moto_market.services

Service layer.

Responsibilities:
- Own multi-step operations that span the registry and the database.
"""

# Package marker.
