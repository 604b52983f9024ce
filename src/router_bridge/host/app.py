"""Host application.

Creates the Starlette ASGI application serving a `Router`.
"""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from .router import Router

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}


def create_app(router: Router, debug: bool = False) -> Starlette:
    """Create the host application for a router.

    - OPTIONS answers the CORS preflight
    - POST dispatches to the command named by the path
    - any other method is rejected with 405

    Returns:
        Configured Starlette application
    """

    async def endpoint(request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        if request.method == "POST":
            response = await router.handle_request(request)
            response.headers.update(CORS_HEADERS)
            return response

        return Response(
            content=b"only POST and OPTIONS are allowed",
            status_code=405,
            headers={"content-type": "application/json"},
        )

    routes = [Route("/{command:path}", endpoint)]
    app = Starlette(debug=debug, routes=routes)
    app.state.router = router
    return app
