# __init__ for validate utils


from .core import run_validation_checks

__all__ = [
    "run_validation_checks",
]
