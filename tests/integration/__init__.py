"""Live tests against a deployed endpoint."""
