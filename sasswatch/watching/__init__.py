from sasswatch.watching.watcher import Watcher, match_files

__all__ = ["Watcher", "match_files"]
