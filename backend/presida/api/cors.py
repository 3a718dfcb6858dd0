"""Per-endpoint CORS headers.

Each browser-facing endpoint answers its own preflight and tags every
response with the same header set, so the policies live next to the routes
rather than in a global middleware.
"""

from dataclasses import dataclass

from fastapi import Response


@dataclass(frozen=True)
class CORSPolicy:
    """CORS header set of one endpoint."""

    allow_methods: str
    allow_headers: str
    allow_origin: str = "*"

    @property
    def headers(self) -> dict[str, str]:
        """Headers added to preflight and regular responses."""
        return {
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Methods": self.allow_methods,
            "Access-Control-Allow-Headers": self.allow_headers,
        }

    def preflight(self) -> Response:
        """Empty 204 answer to an OPTIONS request."""
        return Response(status_code=204, headers=self.headers)

    def apply(self, response: Response) -> Response:
        """Add the CORS headers to *response* and return it."""
        response.headers.update(self.headers)
        return response


FORCE_LOGOUT_CORS = CORSPolicy(allow_methods="POST, OPTIONS", allow_headers="*")
CHECKOUT_CORS = CORSPolicy(
    allow_methods="GET, POST, PUT, DELETE, OPTIONS",
    allow_headers="Content-Type, Authorization",
)
CHECKOUT_SESSION_CORS = CORSPolicy(
    allow_methods="POST, OPTIONS",
    allow_headers="authorization, x-client-info, apikey, content-type",
)
WEBHOOK_CORS = CORSPolicy(allow_methods="POST, OPTIONS", allow_headers="Content-Type")
