"""Download and extract APT binary package indexes for the sources in a sources list."""

__version__ = "0.1.0"
