"""HTTP layer: routes, dependencies and exception handlers."""
