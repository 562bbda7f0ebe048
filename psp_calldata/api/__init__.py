"""HTTP service for swap calldata preparation."""
