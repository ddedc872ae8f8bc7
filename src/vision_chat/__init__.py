"""Vision chat answer formatting service."""
