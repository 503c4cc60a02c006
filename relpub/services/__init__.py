"""Services wrapping external build tooling."""
