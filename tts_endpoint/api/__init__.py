"""HTTP adapter: routes and dependencies."""
