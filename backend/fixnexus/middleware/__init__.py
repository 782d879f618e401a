"""
FixNexus Backend: Middleware Package
======================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [CORS] → [Request ID] → [Logging] → [GZip] → Route Handler

    - CORS outermost: preflights from origins outside the allow-list are
      rejected before any other processing.
    - Request ID: correlation ID for logs, error bodies and response header.
    - Logging: access line with status and duration, tagged with the ID.

Authentication is not middleware: it is the `require_token` dependency,
attached only to the routes that need it.
"""
