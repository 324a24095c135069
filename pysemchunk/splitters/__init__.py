from .base import Splitter
from .character import CharacterSplitter
from .semantic import SemanticSplitter

__all__ = ["CharacterSplitter", "SemanticSplitter", "Splitter"]
