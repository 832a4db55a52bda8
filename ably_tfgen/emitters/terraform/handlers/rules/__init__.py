"""Rule target handlers, one module per family of integration targets."""
