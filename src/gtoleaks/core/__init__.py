"""Data model, pot bookkeeping, line formatting and configuration."""
