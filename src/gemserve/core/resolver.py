"""Request to file resolution.

Maps a request path onto the content root, applying the directory index
and implicit extension conventions, and turns filesystem outcomes into
Gemini responses.
"""

import logging
import os
from pathlib import Path

from gemserve.config import ResolverConfig
from gemserve.core.filesystem import Missing, ProbeError, open_file, probe
from gemserve.core.mime import ContentTypes, extension_of
from gemserve.core.types import Request, Response, Status, URLPath
from gemserve.core.urls import BadURLError, parse_request_path

BAD_URL = "Bad URL"
NOT_FOUND = "Not Found!"
LOOKUP_ISSUE = "File Lookup Issue"
READ_ISSUE = "File Read Issue"
FOLDER_LOOP = "Folder Loop"
OPEN_ISSUE = "Open File Issue"


class PathEscapeError(ValueError):
    """Raised when a request path resolves outside the content root."""


class Resolver:
    """Resolves requests against a content root.

    Holds only read-only configuration, so one instance can serve
    concurrent requests. Every resolution touches the filesystem afresh.
    """

    def __init__(
        self,
        config: ResolverConfig,
        *,
        content_types: ContentTypes | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            config: Content root, index basename and default extension
            content_types: Extension lookup (default: gemtext-seeded registry)
            logger: Sink for diagnostics not exposed to the client
                    (default: this module's logger)
        """
        self._config = config
        self._root = Path(os.path.abspath(config.root_dir))
        self._content_types = content_types or ContentTypes()
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def root(self) -> Path:
        """Absolute content root."""
        return self._root

    def resolve(self, request: Request) -> Response:
        """Resolve a request and log the outcome.

        Args:
            request: Inbound request

        Returns:
            Response; on success its body is an open stream owned by the caller
        """
        response = self._resolve(request)
        self._logger.info(f"({int(response.status)}) {request.url!r} {response.meta}")
        return response

    def _resolve(self, request: Request) -> Response:
        try:
            path = parse_request_path(request.url)
            file_path = self.local_path(path)
        except (BadURLError, PathEscapeError) as e:
            self._logger.warning(f"{request.origin}: {e}")
            return _bad_request()

        result = probe(file_path)
        if isinstance(result, Missing):
            if file_path != self._root and extension_of(file_path.name) == "":
                return self._serve(Path(f"{file_path}{self._config.extension}"))
            return _not_found()
        if isinstance(result, ProbeError):
            self._logger.error(result.detail)
            return _failure(LOOKUP_ISSUE)

        if result.is_dir:
            index_path = file_path / f"{self._config.default_file}{self._config.extension}"
            index = probe(index_path)
            if isinstance(index, Missing):
                return _not_found()
            if isinstance(index, ProbeError):
                self._logger.error(index.detail)
                return _failure(READ_ISSUE)
            if index.is_dir:
                return _failure(FOLDER_LOOP)
            return self._serve(index_path)

        return self._serve(file_path)

    def local_path(self, path: URLPath) -> Path:
        """Join a request path onto the content root.

        The result is lexically normalized. A leading slash never re-roots
        the join.

        Args:
            path: Decoded request path (e.g., "/docs/guide")

        Returns:
            Absolute filesystem path under the content root

        Raises:
            PathEscapeError: If the normalized path leaves the content root
        """
        root = str(self._root)
        joined = os.path.normpath(os.path.join(root, path.lstrip("/")))
        if os.path.commonpath([root, joined]) != root:
            raise PathEscapeError(f"path {path!r} escapes content root {root}")
        return Path(joined)

    def _serve(self, file_path: Path) -> Response:
        opened = open_file(file_path)
        if isinstance(opened, Missing):
            return _not_found()
        if isinstance(opened, ProbeError):
            self._logger.error(opened.detail)
            return _failure(OPEN_ISSUE)
        return Response(
            status=Status.SUCCESS,
            meta=self._content_types.content_type_for(file_path.name),
            body=opened,
        )


def _bad_request() -> Response:
    return Response(status=Status.BAD_REQUEST, meta=BAD_URL)


def _not_found() -> Response:
    return Response(status=Status.NOT_FOUND, meta=NOT_FOUND)


def _failure(reason: str) -> Response:
    return Response(status=Status.TEMPORARY_FAILURE, meta=reason)
