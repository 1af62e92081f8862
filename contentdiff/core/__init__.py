"""Core classification and reconciliation logic, free of I/O."""
