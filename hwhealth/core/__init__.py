"""Health evaluation and aggregation engine."""
