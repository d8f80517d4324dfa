# src/memsim_core/simulation/exceptions.py
"""
Diagnosable exceptions raised by the simulation facade before integration starts.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class InvalidRunSettingsError(DiagnosableError):
    """
    Raised when the run length or output sampling of a configuration cannot be
    integrated (non-positive `t_max`, fewer than two output points).
    """
    setting: str
    value: object
    details: str
    model_id: str = ""

    def __str__(self):
        return f"Invalid run setting '{self.setting}' = {self.value!r}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Run Setting",
            details=self.details,
            suggestion="Use a positive 't_max' and at least two output points ('num_points' >= 2).",
            context={'model_id': self.model_id, 'user_input': f"{self.setting}={self.value!r}"}
        )
