"""Custom exceptions for surface-formatter."""


class FormatterError(Exception):
    """Base class for every error raised while formatting a document."""


class MalformedInputError(FormatterError):
    """Raised when a node tree violates the expected node shapes.

    Attributes:
        node: Short description of the offending node (tag name or type)
        message: Human-readable error message
    """

    def __init__(self, node: str, message: str):
        """Initialize MalformedInputError.

        Args:
            node: Short description of the offending node
            message: Human-readable error message
        """
        self.node = node
        self.message = message
        super().__init__(f"{message}: {node}")


class ExpressionSyntaxError(FormatterError):
    """Raised when an embedded expression cannot be parsed.

    Attributes:
        code: The expression fragment that was rejected
        reason: Parser message describing the failure
    """

    def __init__(self, code: str, reason: str):
        self.code = code
        self.reason = reason
        super().__init__(f"Invalid expression {code!r}: {reason}")


class MarkupParseError(FormatterError):
    """Raised when template source text cannot be parsed into nodes.

    Attributes:
        message: Human-readable error message
        line: 1-based line of the failure
        column: 1-based column of the failure
    """

    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} (line {line}, column {column})")


class FileModifiedError(Exception):
    """Raised when a file is modified while it is being formatted.

    The file changed between the read and the write-back, so writing the
    formatted text would discard someone else's edit.

    Attributes:
        path: Path to the file that was modified
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str = "File was modified during formatting"):
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")
