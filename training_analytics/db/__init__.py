"""Database access for the read-only training log."""
