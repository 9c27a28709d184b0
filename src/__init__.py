"""blogserve — merged, enhanced and localized blog content for the site."""

__version__ = "0.1.0"
