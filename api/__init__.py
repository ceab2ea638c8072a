"""api/ -- HTTP boundary: FastAPI app, routers and transport models."""
