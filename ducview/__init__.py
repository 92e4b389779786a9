"""Options, listings, exports, CGI pages and browsers for a disk usage index."""

__version__ = "0.1.0"