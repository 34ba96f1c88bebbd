# Middleware package init
"""
Mflix API - Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so the access log line carries the id.
    - The access log sees the final status code, including envelopes
      produced by exception handlers.
"""
