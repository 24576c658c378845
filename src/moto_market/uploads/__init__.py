"""
moto_market.uploads

Ephemeral upload intake.

Responsibilities:
- Screen incoming files at the ingestion boundary (media type, size).
- Mint identities for accepted payloads and hold them in process memory.
"""

# Package marker.
