"""HTTP API over the calculation engine."""
