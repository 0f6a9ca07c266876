"""CLI utility functions"""

from .output import Presenter, console

__all__ = [
    'Presenter',
    'console',
]
