"""HTTP primitives — headers and the request context read by URL helpers."""
