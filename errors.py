class MinichartError(Exception):
    """Base class for chart rendering errors."""


class InvalidColorError(MinichartError, ValueError):
    pass


class EmptyDatasetError(MinichartError, ValueError):
    pass


class InvalidDataError(MinichartError, TypeError):
    pass


class DegenerateRangeError(MinichartError):
    """
    All values in the dataset are equal.
    Never raised by the engine: constant datasets are drawn at mid-height.
    """


class DegenerateCanvasError(MinichartError, ValueError):
    pass
