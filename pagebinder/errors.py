"""Exception types raised by page selection and page assembly."""


class PageSelectionError(ValueError):
    """A page selection string was rejected.

    The message is meant to be shown to the user verbatim.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AssemblyError(RuntimeError):
    """Fatal failure while building an output document."""

    code = "PROCESSING_FAILED"


class DecodeError(AssemblyError):
    """Source bytes could not be read as a PDF document."""

    code = "DECODE_FAILED"


class GeometryError(AssemblyError):
    """A source page has no usable width or height."""

    code = "INVALID_GEOMETRY"


class SerializationError(AssemblyError):
    """The output document could not be written."""

    code = "PROCESSING_FAILED"
