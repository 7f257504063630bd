"""Infrastructure: persistence, object storage, mail and security adapters."""
