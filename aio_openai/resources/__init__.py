"""
Resource clients, one per API group.

Every operation decorated with ``@byot`` also has a ``<name>_byot`` twin
accepting caller-supplied request and response types.
"""

from .base import Resource
from .audio import Audio
from .chat import Chat
from .completions import Completions
from .embeddings import Embeddings
from .files import Files
from .images import Images
from .models import Models
from .moderations import Moderations

__all__ = [
    "Resource",
    "Audio",
    "Chat",
    "Completions",
    "Embeddings",
    "Files",
    "Images",
    "Models",
    "Moderations",
]
