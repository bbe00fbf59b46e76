"""Infrastructure adapters: database, table stores, settings, logging."""
