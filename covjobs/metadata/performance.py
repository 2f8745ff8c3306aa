"""
Performance Tracking Module for covjobs

Times a whole command run and samples the process resident set size so the
run summary can report elapsed seconds and peak memory.

Classes:
    RunStopwatch: Start/checkpoint/stop timing with memory sampling
    RunEvent: Final timing and memory figures for a stopped run
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import psutil


BYTES_PER_MB = 1024 * 1024


def process_rss_bytes() -> int:
    """Current resident set size of this process."""
    return psutil.Process().memory_info().rss


@dataclass
class RunEvent:
    """Timing and memory figures for a finished run."""
    name: str
    duration_seconds: float
    peak_memory_bytes: int

    @property
    def peak_memory_mb(self) -> float:
        return self.peak_memory_bytes / BYTES_PER_MB

    def format_summary(self) -> str:
        return (
            f"elapsed time: [cyan]{self.duration_seconds:.3f}[/cyan] sec "
            f"memory: [cyan]{self.peak_memory_mb:.2f}[/cyan] MB"
        )


class RunStopwatch:
    """Times a named run and keeps the highest memory sample seen."""

    def __init__(self, name: str, memory_sampler: Callable[[], int] = process_rss_bytes,
                 clock: Callable[[], float] = time.perf_counter):
        self.name = name
        self.memory_sampler = memory_sampler
        self.clock = clock
        self.start_time: Optional[float] = None
        self.samples: List[int] = []

    def start(self):
        """Start timing the run."""
        if self.is_running():
            raise RuntimeError(f"Run '{self.name}' timing already started")
        self.start_time = self.clock()
        self.samples = []
        self.checkpoint()

    def checkpoint(self):
        """Record a memory sample."""
        try:
            self.samples.append(self.memory_sampler())
        except psutil.Error:
            # Sampling is best effort; the run itself is unaffected
            pass

    def stop(self) -> RunEvent:
        """Stop timing and return the run figures."""
        if not self.is_running():
            raise RuntimeError(f"Run '{self.name}' timing not started")
        self.checkpoint()
        duration = self.clock() - self.start_time
        self.start_time = None
        return RunEvent(
            name=self.name,
            duration_seconds=duration,
            peak_memory_bytes=max(self.samples) if self.samples else 0,
        )

    def is_running(self) -> bool:
        return self.start_time is not None
