"""
Sampler interfaces.

A sampler is what the load-testing harness drives: one call, one measured
remote operation, one result.
"""

from abc import ABC, abstractmethod

from ..domain.models import SampleResult


class ISampler(ABC):
    """Interface for a sampler that produces one result per invocation."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the sampler name used in result labels."""
        pass

    @abstractmethod
    async def sample(self) -> SampleResult:
        """
        Run one sample now with the current configuration.

        Never raises for remote or connection failures; they are reported
        in the returned result.
        """
        pass
