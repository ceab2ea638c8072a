"""api/routes/ -- One APIRouter per resource."""
