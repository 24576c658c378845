"""
moto_market.auth

Authentication/authorization package.

Responsibilities:
- Password hashing and JWT helpers.
- TokenService (credential check + token issue/validate).
- AccessGate and the FastAPI `require_admin` dependency built on it.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in here imports the upload registry; the two halves of the core are independent.
