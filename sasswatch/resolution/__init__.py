from sasswatch.resolution.import_scanner import ImportScanner, build_import_matcher
from sasswatch.resolution.partial_resolver import MAX_IMPORT_DEPTH, PartialResolver

__all__ = ["MAX_IMPORT_DEPTH", "ImportScanner", "PartialResolver", "build_import_matcher"]
