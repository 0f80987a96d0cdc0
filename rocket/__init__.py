# Core type aliases for Rocket's data model.
# Code is represented with plain Python values plus three small classes:
# - Symbol: bare words, including directive names such as `:concat`
# - Form:   an immutable parenthesised list that remembers its source position
# - Number: a numeric literal
# Strings are `str`; numbers are `Number`, which keeps the literal text.
#
# Naming guidance:
# - Expr:  use in reader/evaluator code to denote parsed syntax.
# - Handler: signature of a built-in directive implementation.

from typing import Any, Callable

__version__ = "0.3.0"

# Parsed expression alias (Symbol | str | Number | Form)
Expr = Any

# Built-in directive handler: (tail, env, evaluator) -> output text
Handler = Callable[..., str]
