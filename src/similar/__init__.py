"""Find groups of similar text files in a directory."""

__version__ = "0.1.0"
