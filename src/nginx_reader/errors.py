"""Exception hierarchy for nginx-reader.

Read and syntax errors abort a parse and no partial document is returned.
Value format errors only come from typed accessors called on a finished tree.
"""


class NginxReaderError(Exception):
    """Base class for every error raised by nginx-reader."""


class ConfigReadError(NginxReaderError):
    """A configuration file could not be read."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class IncludeError(ConfigReadError):
    """An include directive could not be resolved (bad glob, cycle, depth)."""


class ConfigSyntaxError(NginxReaderError):
    """The block structure of the configuration is invalid."""


class UnsupportedBlockError(ConfigSyntaxError):
    """A block kind is not allowed in the current context."""

    def __init__(self, block: str, context: str) -> None:
        super().__init__(f"Unsupported block {block} inside {context}")
        self.block = block
        self.context = context


class UnterminatedBlockError(ConfigSyntaxError):
    """Input ended before the block was closed."""

    def __init__(self, block: str = "") -> None:
        message = "Can't find block end"
        if block:
            message = f"Can't find block end for {block} block"
        super().__init__(message)
        self.block = block


class MissingBlockNameError(ConfigSyntaxError):
    """A block that requires a name argument has none."""

    def __init__(self, block: str) -> None:
        super().__init__(f"Unsupported {block} block doesn't have the name")
        self.block = block


class UnexpectedBlockEndError(ConfigSyntaxError):
    """A closing brace was found outside of any block."""

    def __init__(self, line_number: int) -> None:
        super().__init__(f"Unexpected block end at statement {line_number}")
        self.line_number = line_number


class SettingsError(NginxReaderError):
    """The settings file is missing, unreadable or invalid."""


class ValueFormatError(NginxReaderError, ValueError):
    """A directive value does not have the requested shape."""


class EmptyValueError(ValueFormatError):
    """The directive is absent or has an empty value."""

    def __init__(self) -> None:
        super().__init__("Value is empty")
