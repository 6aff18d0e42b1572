"""exception types raised by mdlatex."""


class MdLatexError(Exception):
    """base class for mdlatex errors."""


class ConversionError(MdLatexError):
    """raised when the Markdown converter cannot render its input."""


class AppendError(MdLatexError):
    """raised when a render target fails to accept a fragment."""
