# pstr Errors
#
# Raised for caller misuse only. A buffer that is too small is not an
# error: mutators report that by returning False.


class PstrError(Exception):
    """Base class for pstr misuse errors."""
    pass


class CapacityError(PstrError, ValueError):
    """Capacity is negative or larger than the buffer object."""
    pass


class UnterminatedError(PstrError, ValueError):
    """An in-place operation got a buffer with no terminator in bounds."""
    pass


class CharError(PstrError, ValueError):
    """A character argument is not a single byte."""
    pass
