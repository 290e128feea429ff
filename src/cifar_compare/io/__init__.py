"""Result persistence."""

from cifar_compare.io.writer import ResultWriter

__all__ = ["ResultWriter"]
