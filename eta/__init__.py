# Core type aliases for Eta's data model.
# Code and data share one representation: the parser produces the same tagged
# value tree (eta.types.values) that the evaluator consumes and returns.
#
# Naming guidance:
# - SExpression: Use in reader/printer code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to the Value base class and are interchangeable.

from typing import Callable

from eta.types.values import Value

# Runtime value alias
LispValue = Value
# Forms alias (the reader hands these to the evaluator unchanged)
SExpression = Value

# Evaluator function type: evaluator handed to primitives so they control their own evaluation order
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.3.0"
