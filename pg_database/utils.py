from typing import Optional, Tuple


def convertible_to_non_neg_int(value) -> Tuple[bool, int]:
    if isinstance(value, bool):
        return (False, 0)
    try:
        ivalue = int(value)
        if ivalue < 0:
            return (False, 0)
        return (True, ivalue)
    except (TypeError, ValueError):
        return (False, 0)

def validate_non_neg_int(value: Optional[int], name: str = "value") -> int:
    """
    Validate and convert a value to a non-negative integer.

    Args:
        value: The value to validate.
        name (str): Name used in the error message.

    Returns:
        int: The converted value.

    Raises:
        ValueError: If the value cannot be converted to a non-negative integer.
    """
    can_convert, ivalue = convertible_to_non_neg_int(value)
    if not can_convert:
        raise ValueError(f"{name} must be a non negative integer")
    return ivalue
