# Middleware package init
"""
SmartAI Backend - Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Body Limit] → Route

    1. Request ID: correlation ID for every log line of the request
    2. Logging: sees the Origin header before CORS can reject the request
    3. GZip: compresses JSON list responses
    4. CORS: answers preflights, rejects origins outside the allow-list
    5. Body Limit: runs inside CORS so 413 responses still carry CORS headers

Token verification is not middleware: routes opt in with the
`get_current_user` dependency from auth.py.
"""
