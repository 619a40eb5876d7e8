"""apt-sync - curated APT package lists for Debian-family systems."""

__version__ = "0.1.0"
