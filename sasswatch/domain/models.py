"""Transient value objects passed between the guard and its collaborators."""

from dataclasses import dataclass, field


@dataclass
class CompileResult:
    """Outcome of one compiler invocation."""

    changed_files: list[str] = field(default_factory=list)
    success: bool = True


@dataclass
class ChangeBatch:
    """Coalesced filesystem events for one watch-host pass."""

    changed: set[str] = field(default_factory=set)  # created + modified
    removed: set[str] = field(default_factory=set)

    @property
    def total_count(self) -> int:
        return len(self.changed) + len(self.removed)

    def is_empty(self) -> bool:
        return self.total_count == 0
