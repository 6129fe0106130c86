"""
Multi-step transaction runner.

Composite operations (purchase, verify) are an ordered list of steps, each
a single processor call. The runner decides which steps execute and which
result the caller sees:

- A counted step runs only while every counted result so far succeeded.
- An IGNORE_RESULT step runs even after a failure (if its guard allows) and
  its result is kept in ``discarded``; it never affects success or primary.
- USE_FIRST: the first result is primary when the whole pipeline succeeded.
  Otherwise, and always under USE_LAST, the last counted result is primary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from cardconnect.contracts.transactions import PipelineOutcome, TransactionResult

logger = logging.getLogger(__name__)


class PipelinePolicy(str, Enum):
    USE_FIRST = "use_first"
    USE_LAST = "use_last"
    IGNORE_RESULT = "ignore_result"


Prior = Sequence[TransactionResult]


@dataclass(frozen=True)
class PipelineStep:
    action: Callable[[Prior], TransactionResult]
    policy: Optional[PipelinePolicy] = None
    guard: Optional[Callable[[Prior], bool]] = None
    name: str = "step"

    @property
    def ignore_result(self) -> bool:
        return self.policy is PipelinePolicy.IGNORE_RESULT


def run_pipeline(
    steps: Iterable[PipelineStep],
    policy: PipelinePolicy = PipelinePolicy.USE_FIRST,
) -> PipelineOutcome:
    if policy is PipelinePolicy.IGNORE_RESULT:
        raise ValueError("IGNORE_RESULT applies to steps, not to a whole pipeline.")

    results: List[TransactionResult] = []
    discarded: List[TransactionResult] = []

    for step in steps:
        failed = any(not result.success for result in results)
        if failed and not step.ignore_result:
            logger.debug("[CARDCONNECT] Skipping %s after failed step", step.name)
            continue
        if step.guard is not None and not step.guard(tuple(results)):
            logger.debug("[CARDCONNECT] Guard declined %s", step.name)
            continue

        result = step.action(tuple(results))
        if step.ignore_result:
            discarded.append(result)
            if not result.success:
                logger.info("[CARDCONNECT] Ignored failure from %s: %s", step.name, result.message)
        else:
            results.append(result)

    if not results:
        raise ValueError("Pipeline produced no result; at least one counted step must run.")

    success = all(result.success for result in results)
    if success and policy is PipelinePolicy.USE_FIRST:
        primary = results[0]
    else:
        primary = results[-1]

    return PipelineOutcome(
        results=tuple(results),
        discarded=tuple(discarded),
        primary=primary,
        success=success,
    )
