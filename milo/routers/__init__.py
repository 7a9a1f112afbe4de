"""
Routers module - API endpoint handlers organized by feature.

- ai: /api/v1/ai/response, /api/v1/ai/router, /api/v1/ai/transcribe
"""
