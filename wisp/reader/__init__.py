from wisp.reader.parser import Reader, parse

__all__ = ["Reader", "parse"]
