"""Runtime values of lox are plain Python objects:

```
Number -> float
Bool   -> bool
String -> str
Nil    -> None
```

Python considers 1.0 == True, so equality between values must check kinds first: values of different kinds are never
equal in lox.
"""

from lox.lang.numerical import format_number


def is_number(value):
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value):
    """nil and false are falsy, everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    return type(left) is type(right) and left == right


def stringify(value):
    """Returns value as written by print: no quotes around strings."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return value
