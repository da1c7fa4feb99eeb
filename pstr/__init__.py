# pstr Bounded String Toolkit
#
# In-place string operations on fixed-capacity, NUL-terminated buffers.
#
# Modules:
#   string  - validation, queries, copy/cat/split, slice, trim, from_int64
#   memory  - memset/memcpy/memmove/memcmp over buffers
#   chars   - ASCII character classes and byte coercion
#   errors  - PstrError hierarchy for caller misuse
#   log     - logger setup for the pstr namespace
#   cli     - the pstr command line

from .errors import PstrError, CapacityError, UnterminatedError, CharError
from .string import *  # noqa: F401,F403
from .string import __all__ as _string_all

__version__ = "0.1.0"

__all__ = ["PstrError", "CapacityError", "UnterminatedError", "CharError",
           *_string_all]
