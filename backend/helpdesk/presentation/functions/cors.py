"""Permissive CORS headers for the function endpoints.

Functions are called straight from the browser with a bearer token, so they
answer any origin and set the headers themselves on every response.
"""

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}
