"""
Result assembly.

Turns executor outcomes and sample failures into the result record the
load-testing harness consumes.
"""

import time
from typing import Optional

from ..core.domain.exceptions import ConnectFailure, SamplerError
from ..core.domain.models import (
    CONTENT_TYPE_TEXT, ConnectionParameters, ExecutionOutcome, SampleResult
)


class ResultAssembler:
    """Builds sample results labelled for one sampler and endpoint."""

    def __init__(self, name: str, params: ConnectionParameters):
        self._name = name
        self._params = params

    @property
    def label(self) -> str:
        return f"{self._name}:({self._params.username}@{self._params.host}:{self._params.port})"

    def _new_result(self, sampler_data: str) -> SampleResult:
        return SampleResult(
            label=self.label,
            sampler_data=sampler_data,
            content_type=CONTENT_TYPE_TEXT
        )

    def from_outcome(self, sampler_data: str, outcome: ExecutionOutcome) -> SampleResult:
        """Record a completed operation."""
        result = self._new_result(sampler_data)
        result.response_data = outcome.payload
        result.successful = outcome.succeeded
        result.response_code = outcome.response_code
        result.response_message = outcome.response_message
        result.start_time = outcome.start_time
        result.end_time = outcome.end_time
        return result

    def from_failure(self, sampler_data: str, error: SamplerError) -> SampleResult:
        """Record an operation that failed part way; partial output is kept."""
        result = self._new_result(sampler_data)
        result.response_data = error.payload
        result.successful = False
        result.response_code = error.response_code
        result.response_message = error.message
        result.start_time = error.start_time
        result.end_time = error.end_time
        return result

    def connection_failed(
        self,
        sampler_data: str,
        reason: str,
        at: Optional[float] = None
    ) -> SampleResult:
        """Record a sample that never got a session."""
        now = at if at is not None else time.time()
        error = ConnectFailure(f"Failed to connect to server: {reason}", b"", now, now)
        return self.from_failure(sampler_data, error)

    def unexpected_error(self, sampler_data: str, error: Exception) -> SampleResult:
        """Record an error no executor classified."""
        now = time.time()
        result = self._new_result(sampler_data)
        result.successful = False
        result.response_code = error.__class__.__name__
        result.response_message = str(error)
        result.start_time = now
        result.end_time = now
        return result
