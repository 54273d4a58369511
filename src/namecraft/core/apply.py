"""Batch two-phase rename.

Renames a batch of files in two phases:
1. every source moves to a ``~temp_`` staging name in its own directory;
2. every staging name moves to its final name through the guarded rename.

Because all sources vacate their names before any final name is claimed,
swaps and rotations (a -> b, b -> a) work without a spare name. On the first
failure every completed move is reverted in reverse order and the batch
reports the failure. Revert failures are logged and leave the file under
whatever name it had reached.

The batch is not atomic: another process can take a final name between the
collision check and the move, which surfaces as a failure and a rollback.
"""

import logging
import time as time_mod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple, Union

from namecraft.core.names import generate_temp_name, resolve_safe_name
from namecraft.errors import NamecraftError
from namecraft.fs.operations import rename

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class RenamePlan:
    """One file's journey: source -> temp_name -> final_name (same directory)."""

    source: Path
    final_name: str
    temp_name: str

    @property
    def directory(self) -> Path:
        return self.source.parent

    @property
    def temp_path(self) -> Path:
        return self.directory / self.temp_name

    @property
    def final_path(self) -> Path:
        return self.directory / self.final_name


@dataclass
class ApplyResult:
    """Result of applying a batch of renames."""

    success: bool
    renamed: List[RenamePlan] = field(default_factory=list)
    failures: List[Tuple[RenamePlan, str]] = field(default_factory=list)
    rolled_back: bool = False
    skipped: int = 0
    duration: float = 0.0

    def to_record(self) -> Dict[str, Any]:
        """Dump to the camelCase dict the front end reads."""
        return {
            "success": self.success,
            "renamed": [
                {"source": str(p.source), "target": str(p.final_path)}
                for p in self.renamed
            ],
            "failures": [
                {"source": str(p.source), "finalName": p.final_name, "error": msg}
                for p, msg in self.failures
            ],
            "rolledBack": self.rolled_back,
            "skipped": self.skipped,
            "duration": self.duration,
        }


def _check_final_name(name: str) -> None:
    if not name or Path(name).name != name or name in (".", ".."):
        raise ValueError(f"Final name must be a bare file name: {name!r}")


def plan_renames(pairs: Iterable[Tuple[PathLike, str]]) -> List[RenamePlan]:
    """Build RenamePlans for ``(source, new_name)`` pairs.

    Pairs whose new name equals the current name are dropped.

    Raises:
        ValueError: If a new name is not a bare file name, a source appears
            twice, or two sources target the same final path.
    """
    plans: List[RenamePlan] = []
    seen_sources = set()
    seen_targets = set()
    for source, new_name in pairs:
        src = Path(source)
        _check_final_name(new_name)
        if src in seen_sources:
            raise ValueError(f"Duplicate source in batch: {src}")
        seen_sources.add(src)
        if new_name == src.name:
            continue
        target = src.parent / new_name
        if target in seen_targets:
            raise ValueError(f"Duplicate target in batch: {target}")
        seen_targets.add(target)
        plans.append(
            RenamePlan(
                source=src,
                final_name=new_name,
                temp_name=generate_temp_name(src.parent, src.name),
            )
        )
    return plans


def _rollback(moves: List[Tuple[Path, Path]]) -> bool:
    clean = True
    for src, dst in reversed(moves):
        try:
            rename(dst, src)
        except OSError as e:
            clean = False
            logger.warning(f"Rollback failed for {dst} -> {src}: {e}")
    return clean


def apply_renames(
    pairs: Iterable[Tuple[PathLike, str]], resolve_conflicts: bool = False
) -> ApplyResult:
    """Rename a batch of files through temporary names, rolling back on failure.

    Args:
        pairs: ``(source_path, new_name)``; the new name stays in the source's
            directory.
        resolve_conflicts: When True, an occupied final name is replaced by
            the first free ``stem(N)ext`` variant instead of failing.

    Returns:
        ApplyResult. On failure ``renamed`` is empty and ``rolled_back`` says
        whether every completed move was reverted.

    Raises:
        ValueError: For a malformed batch (see plan_renames). Nothing is
            moved in that case.
    """
    start = time_mod.time()
    pairs = list(pairs)
    plans = plan_renames(pairs)
    skipped = len(pairs) - len(plans)
    moves: List[Tuple[Path, Path]] = []
    current = None
    try:
        for plan in plans:
            current = plan
            rename(plan.source, plan.temp_path)
            moves.append((plan.source, plan.temp_path))
        for plan in plans:
            current = plan
            if resolve_conflicts:
                plan.final_name = resolve_safe_name(plan.directory, plan.final_name)
            rename(plan.temp_path, plan.final_path)
            moves.append((plan.temp_path, plan.final_path))
    except (NamecraftError, OSError) as e:
        logger.warning(f"Rename of {current.source} failed: {e}; rolling back")
        rolled_back = _rollback(moves)
        return ApplyResult(
            success=False,
            failures=[(current, str(e))],
            rolled_back=rolled_back,
            skipped=skipped,
            duration=time_mod.time() - start,
        )

    logger.debug(f"Renamed {len(plans)} file(s), skipped {skipped}")
    return ApplyResult(
        success=True,
        renamed=plans,
        skipped=skipped,
        duration=time_mod.time() - start,
    )


__all__ = ["ApplyResult", "RenamePlan", "apply_renames", "plan_renames"]
