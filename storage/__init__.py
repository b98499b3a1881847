"""Storage backends."""

from .abstract_storage import CATEGORIES, AbstractStorage
from .local_storage import LocalStorage

__all__ = ["CATEGORIES", "AbstractStorage", "LocalStorage"]
