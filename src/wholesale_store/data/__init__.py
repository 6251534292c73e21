"""Data subpackage - seed catalog loading and the in-memory catalog store."""
