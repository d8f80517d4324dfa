# src/memsim_core/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class MemSimError(Exception):
    """Base class for all custom, user-facing errors in MemSim Core."""
    pass

class SimulationConfigError(MemSimError):
    """
    Raised when a simulation cannot start because its configuration is invalid,
    e.g. an unregistered model id or a parameter set that does not cover the
    model's declared parameters. The message is a pre-formatted diagnostic report.
    No partial result is ever produced when this error is raised.
    """
    pass

class SimulationRunError(MemSimError):
    """
    Raised when a simulation fails unexpectedly after its configuration was
    accepted. The message is a pre-formatted diagnostic report and the original
    exception is chained for debugging.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Concrete base class for all internal exceptions that are diagnosable.

    Subclasses are catchable as ordinary exceptions and must implement
    `get_diagnostic_report`, which the `simulate` facade uses to build the
    message of the user-facing error it raises.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats the final multi-line report string so that every user-facing
    diagnostic has the same layout.

    Args:
        error_type: The high-level category of the error (e.g., "Unknown Model").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: Contextual information (model id, signal type, user input, ...).

    Returns:
        A formatted report string ready for display.
    """
    lines = [
        "\n",
        "================ MemSim Core: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if model_id := context.get('model_id'):
        lines.append(f"Model:          {model_id}")
    if signal_type := context.get('signal_type'):
        lines.append(f"Signal:         {signal_type}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=========================================================================")
    return "\n".join(lines)
