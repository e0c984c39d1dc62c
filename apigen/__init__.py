"""Generate a typed TypeScript client from an OpenAPI document."""
