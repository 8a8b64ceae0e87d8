"""HTTP API endpoints for the preview server."""
