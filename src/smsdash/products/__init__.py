"""Products and their per-product message templates."""
