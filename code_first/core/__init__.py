"""Core build plumbing: configuration, errors, naming, engine handle, schema builder."""
