"""InstructFinder - lexical section search over a reference document."""

__version__ = "0.1.0"
