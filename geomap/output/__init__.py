"""Output surfaces: query engine, analytics and graph renderers."""
