"""
Repeated sampling.

Runs a sampler several times, each sample with its own session, and keeps
simple statistics over the results.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..core.domain.models import SampleResult
from ..core.interfaces.samplers import ISampler

logger = logging.getLogger(__name__)

ResultCallback = Callable[[SampleResult], None]


@dataclass
class SampleStatistics:
    """Aggregate figures over a run of samples."""
    total_samples: int = 0
    successful_samples: int = 0
    failed_samples: int = 0
    total_elapsed_ms: int = 0
    min_elapsed_ms: Optional[int] = None
    max_elapsed_ms: int = 0
    response_codes: Dict[str, int] = field(default_factory=dict)

    @property
    def average_elapsed_ms(self) -> float:
        """Calculate average elapsed time."""
        if self.total_samples == 0:
            return 0.0
        return self.total_elapsed_ms / self.total_samples

    @property
    def error_rate(self) -> float:
        """Calculate error rate percentage."""
        if self.total_samples == 0:
            return 0.0
        return (self.failed_samples / self.total_samples) * 100.0

    def record(self, result: SampleResult) -> None:
        """Record a sample result."""
        elapsed = result.elapsed_ms
        self.total_samples += 1
        self.total_elapsed_ms += elapsed

        if result.successful:
            self.successful_samples += 1
        else:
            self.failed_samples += 1

        if self.min_elapsed_ms is None or elapsed < self.min_elapsed_ms:
            self.min_elapsed_ms = elapsed
        if elapsed > self.max_elapsed_ms:
            self.max_elapsed_ms = elapsed

        self.response_codes[result.response_code] = \
            self.response_codes.get(result.response_code, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "samples": self.total_samples,
            "successful": self.successful_samples,
            "failed": self.failed_samples,
            "error_rate": round(self.error_rate, 2),
            "min_ms": self.min_elapsed_ms or 0,
            "avg_ms": round(self.average_elapsed_ms, 1),
            "max_ms": self.max_elapsed_ms,
            "response_codes": dict(self.response_codes),
        }


async def run_samples(
    sampler: ISampler,
    iterations: int = 1,
    concurrency: int = 1,
    on_result: Optional[ResultCallback] = None
) -> List[SampleResult]:
    """
    Run ``iterations`` independent samples.

    Args:
        sampler: Sampler to drive
        iterations: Number of samples to take
        concurrency: Maximum samples in flight at once
        on_result: Called with each result as it completes

    Returns:
        Results in the order the samples were started
    """
    if iterations < 1:
        raise ValueError("Iterations must be at least 1")
    if concurrency < 1:
        raise ValueError("Concurrency must be at least 1")

    semaphore = asyncio.Semaphore(concurrency)

    async def take_sample(index: int) -> SampleResult:
        async with semaphore:
            result = await sampler.sample()
            logger.debug(
                f"Sample {index + 1}/{iterations}: {result.response_code} "
                f"in {result.elapsed_ms}ms")
            if on_result:
                on_result(result)
            return result

    return list(await asyncio.gather(*(take_sample(i) for i in range(iterations))))


def summarize(results: List[SampleResult]) -> SampleStatistics:
    """Build statistics for a list of results."""
    stats = SampleStatistics()
    for result in results:
        stats.record(result)
    return stats
