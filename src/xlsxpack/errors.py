"""Error taxonomy shared by the writer and reader passes.

- ``PackageIOError``: stream/archive/XML failures, always fatal, keeps the cause.
- ``PackageFormatError``: a value cannot be encoded (e.g. OA date range).
- ``StyleError``: invalid style field or missing number format on reconstruction.
- ``NotSupportedContentError``: content the reader refuses unless told to ignore it.
"""


class XlsxPackError(Exception):
    pass


class PackageIOError(XlsxPackError, OSError):
    pass


class PackageFormatError(XlsxPackError, ValueError):
    pass


class StyleError(XlsxPackError, ValueError):
    pass


class NotSupportedContentError(XlsxPackError):
    pass
