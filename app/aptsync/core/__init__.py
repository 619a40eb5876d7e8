"""Core reconciliation, installation and provenance logic for apt-sync."""
