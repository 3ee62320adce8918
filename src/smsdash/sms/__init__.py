"""SMS provider adapters and campaign dispatch."""
