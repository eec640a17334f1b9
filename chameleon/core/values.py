"""Runtime values of chameleon and their conversions. Only three kinds of values exist:

```
Number   ; Python float (literals are always floats, even "3")
Boolean  ; Python bool
Null     ; None
```

Note that bool is a subclass of int but not of float, so is_number never mistakes a Boolean for a Number.
"""

import math


def is_number(value):
    """Whether or not value is a Number."""
    return isinstance(value, float)


def is_truthy(value):
    """null, false and 0 are falsy. Everything else is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value != 0
    return True


def is_equal(a, b):
    """Structural equality: values of different kinds are never equal, null only equals null."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return type(a) is type(b) and a == b


def stringify(value):
    """Returns the display string of value, as written by print and println."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))  # whole number, so no trailing ".0"
        return repr(value)
    return str(value)
