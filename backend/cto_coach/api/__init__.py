"""HTTP API: routers, schemas and middleware."""
