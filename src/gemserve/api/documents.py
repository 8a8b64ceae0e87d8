"""Documents endpoint.

Resolves the request path like the Gemini server would and streams the
result over HTTP, exposing the Gemini status line in headers.
"""

from aiohttp import web

from gemserve.app_keys import resolver_key
from gemserve.core.types import Request, Status

CHUNK_SIZE = 64 * 1024

HTTP_STATUS = {
    Status.SUCCESS: 200,
    Status.TEMPORARY_FAILURE: 503,
    Status.NOT_FOUND: 404,
    Status.BAD_REQUEST: 400,
}


def create_document_routes() -> list[web.RouteDef]:
    return [
        web.get("/{path:.*}", get_document),
    ]


async def get_document(request: web.Request) -> web.StreamResponse:
    resolver = request.app[resolver_key]
    origin = request.remote or "-"

    # raw_path keeps percent-escapes so malformed ones reach the resolver
    response = resolver.resolve(Request(url=request.raw_path, origin=origin))
    headers = {
        "X-Gemini-Status": str(int(response.status)),
        "X-Gemini-Meta": response.meta,
    }

    if response.body is None:
        return web.Response(
            status=HTTP_STATUS[response.status],
            text=response.meta,
            headers=headers,
        )

    with response:
        stream = web.StreamResponse(
            status=200,
            headers={**headers, "Content-Type": response.meta},
        )
        await stream.prepare(request)
        while chunk := response.body.read(CHUNK_SIZE):
            await stream.write(chunk)
        await stream.write_eof()
    return stream
