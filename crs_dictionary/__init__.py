"""PHP function name word lists for the OWASP CRS PHP injection rules."""

__version__ = "1.0.0"
