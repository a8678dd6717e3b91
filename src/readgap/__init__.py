"""ReadGap: adaptive English / home-language reading assessment."""

__version__ = "0.1.0"
