"""Error channel for the verification checks.

Only malformed arguments and proven divergence are raised. Corrupt lines and
threshold breaches are measurements and travel in the result models.
"""


def describe_symbol(symbol: int) -> str:
    """Render a byte value or code point for diagnostics."""
    if 32 <= symbol < 127:
        return f"{chr(symbol)!r} (0x{symbol:02x})"
    if symbol < 256:
        return f"0x{symbol:02x}"
    return f"U+{symbol:04X} {chr(symbol)!r}"


class VerificationError(Exception):
    """Base class for all verification failures."""

    pass


class InvalidArgument(VerificationError, ValueError):
    """Raised before any I/O when a check is called with unusable arguments."""

    pass


class ContentMismatch(VerificationError):
    """Raised when input and outputs differ as multisets of symbols."""

    direction = "unknown"

    def __init__(self, message: str, symbol: int):
        super().__init__(message)
        self.symbol = symbol


class UnexpectedByte(ContentMismatch):
    """An output holds a symbol the input never had, or more copies of it."""

    direction = "excess_in_output"

    def __init__(self, symbol: int, path: str, offset: int, unit: str = "byte"):
        self.path = path
        self.offset = offset
        self.unit = unit
        where = "char offset" if unit == "char" else "offset"
        super().__init__(
            f"Output log has extra characters not in input: {describe_symbol(symbol)} "
            f"in {path} at {where} {offset}",
            symbol,
        )


class MissingByte(ContentMismatch):
    """Input data that never appeared in any output."""

    direction = "excess_in_input"

    def __init__(self, symbol: int, missing: int, diverging: int = 1):
        self.missing = missing
        self.diverging = diverging
        message = (
            f"Input log has extra characters not in output log: {describe_symbol(symbol)} "
            f"({missing} missing)"
        )
        if diverging > 1:
            message += f"; {diverging} distinct values missing in total"
        super().__init__(message, symbol)


class SizeMismatch(VerificationError):
    """Total output size differs from the input size."""

    def __init__(self, input_size: int, output_size: int):
        self.input_size = input_size
        self.output_size = output_size
        super().__init__(
            f"Expected total size of outputs to be: {input_size} "
            f"but found a total size of: {output_size}"
        )


class EmptyOrMissingInput(VerificationError):
    """The input file does not exist or holds zero bytes."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"The file size doesn't exist or is empty at: {path}")
