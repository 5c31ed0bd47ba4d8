from sasswatch.infrastructure.formatter import Formatter
from sasswatch.infrastructure.sass_runner import SassRunner
from sasswatch.infrastructure.source_tree import SourceTree

__all__ = ["Formatter", "SassRunner", "SourceTree"]
