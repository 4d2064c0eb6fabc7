from .equations import EquationError, evaluate  # noqa: F401
