"""
Application layer containing the samplers and their orchestration.

This layer wires the core domain to the SSH infrastructure: one sampler
per configured operation, result assembly, and repeated runs.
"""

from .assembler import ResultAssembler
from .samplers import AbstractSSHSampler, SSHCommandSampler, SSHSFTPSampler
from .runner import SampleStatistics, run_samples, summarize

__all__ = [
    "ResultAssembler",
    "AbstractSSHSampler",
    "SSHCommandSampler",
    "SSHSFTPSampler",
    "SampleStatistics",
    "run_samples",
    "summarize",
]
