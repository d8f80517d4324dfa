# src/memsim_core/models/exceptions.py
"""
Diagnosable exceptions for the model subsystem.

Both errors are configuration errors: they are detected before any integration
starts, and the `simulate` facade converts them into a user-facing
`SimulationConfigError` carrying their diagnostic report.
"""
from dataclasses import dataclass, field
from typing import List

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class UnknownModelError(DiagnosableError):
    """Raised when a model id does not resolve to a registered model."""
    model_id: str
    available_models: List[str] = field(default_factory=list)

    def __str__(self):
        return f"Unknown model: '{self.model_id}'. Available models: {self.available_models}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unknown Model",
            details=f"No memristor model is registered under the id '{self.model_id}'.",
            suggestion=f"Use one of the registered model ids: {', '.join(self.available_models) or '(none)'}.",
            context={'user_input': self.model_id}
        )


@dataclass()
class MissingParameterError(DiagnosableError):
    """Raised when a parameter mapping does not cover every parameter a model declares."""
    model_id: str
    missing: List[str]

    def __str__(self):
        return f"Model '{self.model_id}' is missing required parameter(s): {self.missing}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Missing Model Parameter",
            details=(
                f"The parameter set supplied for model '{self.model_id}' does not define: "
                f"{', '.join(self.missing)}."
            ),
            suggestion="Supply every declared parameter, e.g. by starting from the model's default_params().",
            context={'model_id': self.model_id}
        )
