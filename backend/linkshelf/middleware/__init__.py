# Middleware package init
"""
LinkShelf Backend — Middleware Package
========================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID sets the correlation ID before anything logs.
    - Logging measures the full handler time and records the final status.
    - CORS is FastAPI's CORSMiddleware and answers preflight requests.

Starlette runs middleware in reverse order of `add_middleware` calls;
see create_app() in main.py.
"""
