"""Infrastructure layer providing reusable components.

- HTTP client with retry logic and bounded per-request timeouts
"""

from funding_scan.infrastructure.http_client import get, post

__all__ = ["get", "post"]
