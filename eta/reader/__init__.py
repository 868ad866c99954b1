from eta.reader.parser import parse_expression, parse_all, is_balanced, is_valid, net_balance
from eta.reader.printer import unparse

__all__ = ["parse_expression", "parse_all", "is_balanced", "is_valid", "net_balance", "unparse"]
