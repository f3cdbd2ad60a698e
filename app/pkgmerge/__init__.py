"""pkgmerge - merged, categorized view of installed and available packages."""

__version__ = "0.3.0"
