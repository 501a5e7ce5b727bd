"""Exception hierarchy for microdot.

Unknown node or edge identifiers are not exceptions: graph commands report
them through their CommandResult and leave the graph untouched. The errors
below cover input that cannot be interpreted at all.
"""


class MicrodotError(Exception):
    """Base class for all microdot errors."""


class GraphFormatError(MicrodotError):
    """A persisted graph document is malformed.

    Raised when the JSON is unreadable, does not match the document schema,
    or references node ids the document does not define.
    """


class VariableParseError(MicrodotError, ValueError):
    """A single ``$name=value`` token could not be parsed.

    Only raised by explicit parse entry points; scanning a whole label never
    raises and leaves unrecognised text in the display label.
    """


class ConfigurationError(MicrodotError):
    """Configuration source is invalid or cannot be loaded."""


class CommandParseError(MicrodotError, ValueError):
    """A textual graph command does not match the command language."""
