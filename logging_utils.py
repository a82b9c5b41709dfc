"""
Request Phase Logging for the Uploadcare Gallery service
========================================================

Provides colored, structured logging of the phases a gallery request goes
through (validation, metadata lookup, rendering) with per-phase timing.
IMPORTANT: No emojis in console output (Windows encoding issues).
"""

import logging
import time
from contextlib import contextmanager
from typing import Dict, Optional

from colorama import Fore, Style, init

# Initialize colorama for Windows
init(autoreset=True)


class Phase:
    """Phase constants for the gallery request pipeline"""
    VALIDATION = "URL_VALIDATION"
    METADATA = "METADATA_FETCH"
    RENDER = "PAGE_RENDER"


PHASE_COLORS = {
    Phase.VALIDATION: Fore.CYAN,
    Phase.METADATA: Fore.BLUE,
    Phase.RENDER: Fore.GREEN,
}

# Text-based icons, no emojis
PHASE_ICONS = {
    Phase.VALIDATION: "[VAL]",
    Phase.METADATA: "[META]",
    Phase.RENDER: "[HTML]",
}


class TimingTracker:
    """Track timing for phases and operations"""

    def __init__(self):
        self._timings: Dict[str, float] = {}
        self._start_times: Dict[str, float] = {}

    def start(self, key: str):
        self._start_times[key] = time.perf_counter()

    def end(self, key: str) -> float:
        """End timing and return elapsed seconds"""
        if key not in self._start_times:
            return 0.0
        elapsed = time.perf_counter() - self._start_times.pop(key)
        self._timings[key] = elapsed
        return elapsed

    def get(self, key: str) -> Optional[float]:
        return self._timings.get(key)

    def get_all(self) -> Dict[str, float]:
        return self._timings.copy()


class PhaseLogger:
    """
    Logger with phase tracking for a single gallery request

    Usage:
        phase_logger = PhaseLogger(request_label="group 1111~3")

        with phase_logger.phase(Phase.METADATA):
            phase_logger.info("Resolving 3 filenames")
    """

    def __init__(self, request_label: str, logger: Optional[logging.Logger] = None):
        self.request_label = request_label
        self.logger = logger or logging.getLogger(__name__)
        self.timing_tracker = TimingTracker()
        self._current_phase: Optional[str] = None

    @contextmanager
    def phase(self, phase_name: str):
        """Context manager that logs the phase and its elapsed time"""
        previous = self._current_phase
        self._current_phase = phase_name
        self.timing_tracker.start(phase_name)
        try:
            yield self
        finally:
            elapsed = self.timing_tracker.end(phase_name)
            color = PHASE_COLORS.get(phase_name, Fore.WHITE)
            icon = PHASE_ICONS.get(phase_name, "[???]")
            self.logger.debug(
                f"{color}{icon} {phase_name} done in {elapsed:.3f}s ({self.request_label}){Style.RESET_ALL}"
            )
            self._current_phase = previous

    def info(self, message: str):
        """Log info message with current phase context"""
        if self._current_phase:
            color = PHASE_COLORS.get(self._current_phase, Fore.WHITE)
            icon = PHASE_ICONS.get(self._current_phase, "[???]")
            self.logger.info(f"{color}{icon}{Style.RESET_ALL} {message}")
        else:
            self.logger.info(message)

    def warning(self, message: str):
        self.logger.warning(f"{Fore.YELLOW}[WARN] {message}{Style.RESET_ALL}")

    def error(self, message: str):
        self.logger.error(f"{Fore.RED}{Style.BRIGHT}[ERROR] {message}{Style.RESET_ALL}")

    def log_decision(self, accepted: bool, reason: Optional[str] = None):
        """Log the outcome of URL validation"""
        if accepted:
            self.logger.info(f"{Fore.GREEN}{Style.BRIGHT}[OK] ACCEPTED {self.request_label}{Style.RESET_ALL}")
        else:
            self.logger.info(f"{Fore.RED}{Style.BRIGHT}[REJECT] {reason or 'rejected'}{Style.RESET_ALL}")

    def log_timing_summary(self):
        """Log one line with the elapsed time of every completed phase"""
        timings = self.timing_tracker.get_all()
        if not timings:
            return
        summary = ", ".join(f"{name}={elapsed:.3f}s" for name, elapsed in timings.items())
        self.logger.info(f"{Fore.WHITE}{Style.BRIGHT}TIMING {self.request_label}: {summary}{Style.RESET_ALL}")
