"""Interprocess communication between a server and its clients over Unix domain sockets."""

__version__ = "0.1.0"