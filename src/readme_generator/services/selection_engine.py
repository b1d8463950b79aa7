"""Selection engine — pick, order and fetch the files the generator will see.

The loop is sequential: whether file *N* is fetched depends on
how much of the budget files *0..N-1* consumed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from readme_generator.domain.entities import (
    ContentFetchBudget,
    Fetched,
    FetchOutcome,
    FileEntry,
    Skipped,
)
from readme_generator.services.file_classifier import (
    is_priority_file,
    is_relevant_file,
    sort_by_priority,
)

logger = logging.getLogger(__name__)

LIMIT_REACHED_ERROR = "Content not fetched due to limit (max files to fetch reached)."


class FileFetcher(Protocol):
    async def fetch(self, entry: FileEntry) -> FetchOutcome: ...


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Priority-ordered entries plus the budget as it stood at the end of the run."""

    entries: list[FileEntry]
    budget: ContentFetchBudget

    @property
    def fetched(self) -> list[FileEntry]:
        return [e for e in self.entries if e.content is not None and e.error is None]


def _too_large(entry: FileEntry, budget: ContentFetchBudget) -> bool:
    return entry.size is not None and entry.size > budget.large_file_threshold


async def select_contents(
    inventory: Iterable[FileEntry],
    fetcher: FileFetcher,
    budget: ContentFetchBudget,
) -> SelectionResult:
    """Run one budgeted selection pass over *inventory*.

    Only non-empty successful fetches consume ``max_files_to_fetch``; every real request
    consumes one of ``max_attempts``. Once the budget is exhausted, relevant
    files are still listed (without content) and everything else is dropped.
    """
    candidates = sort_by_priority(e for e in inventory if e.is_file and e.path)
    selected: list[FileEntry] = []

    for entry in candidates:
        if budget.exhausted:
            if is_relevant_file(entry):
                selected.append(entry.with_outcome(Skipped(LIMIT_REACHED_ERROR)))
            continue

        if _too_large(entry, budget) and not is_priority_file(entry):
            selected.append(
                entry.with_outcome(
                    Skipped(
                        f"File too large to fetch content ({entry.size} bytes). "
                        "Not a priority file."
                    )
                )
            )
            continue

        outcome = await fetcher.fetch(entry)
        budget = budget.record_attempt()
        if isinstance(outcome, Fetched):
            # empty files cost an attempt but not a slot
            if outcome.content:
                budget = budget.record_success()
        else:
            logger.debug("Could not fetch %s: %s", entry.path, outcome)
        selected.append(entry.with_outcome(outcome))

    logger.info(
        "Selected %d of %d files (%d fetched, %d requests)",
        len(selected),
        len(candidates),
        budget.fetched_count,
        budget.attempts,
    )
    return SelectionResult(entries=sort_by_priority(selected), budget=budget)
