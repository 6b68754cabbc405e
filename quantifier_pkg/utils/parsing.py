import sympy as sp

from ..types import ParseError

_LOCAL_NS = {
    "pi": sp.pi,
    "e": sp.E,
    "E": sp.E,
    "sqrt": sp.sqrt,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "log": sp.log,
    "ln": sp.log,
    "exp": sp.exp,
}


def eval_to_float(val):
    """
    Convert a value (string or number) to float, evaluating symbolic expressions.
    Handles 'pi', '1/3', '2*sqrt(2)', 'inf', 'nan', etc.
    """
    if isinstance(val, (int, float)):
        return float(val)

    if isinstance(val, str):
        val_lower = val.lower().strip()
        if val_lower in ("oo", "inf", "infinity"):
            return float("inf")
        if val_lower in ("-oo", "-inf", "-infinity"):
            return float("-inf")
        if val_lower in ("nan", "-nan"):
            return float("nan")

        try:
            # Try direct conversion first
            return float(val)
        except ValueError:
            pass

        # Try evaluating as a symbolic expression
        try:
            expr = sp.sympify(val, locals=_LOCAL_NS)
        except (sp.SympifyError, SyntaxError, TypeError) as e:
            raise ParseError(f"Could not convert '{val}' to a number: {e}") from e
        if not expr.is_number:
            raise ParseError(f"Could not convert '{val}' to a number: free symbols {expr.free_symbols}")
        try:
            res = complex(expr)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Could not convert '{val}' to a number: {e}") from e
        if res.imag != 0:
            raise ParseError(f"Magnitude '{val}' is not real")
        return res.real

    # Try converting other types (numpy scalars, Fraction, Decimal)
    try:
        return float(val)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Could not convert {type(val)} to float: {e}") from e
