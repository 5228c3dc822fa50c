"""chessmate — chess move-legality and check-detection engine."""

__version__ = "0.1.0"
