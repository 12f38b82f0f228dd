# Middleware package init
"""
CarLookup Backend: Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → [Exception Handling] → Route Handler

    Why this order:
    1. CORS outermost: error responses get CORS headers too
    2. Request ID: correlation id exists before anything logs
    3. Logging: sees the final status, including mapped errors
    4. Exception Handling: the single error boundary, closest to the routes
"""
