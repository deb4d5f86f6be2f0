"""Configuration validation and generation errors.

Checks run before generation starts:
1. Kinematics must describe a real jump (positive gravity, jump and speed)
2. Layout thresholds must be consistent with that jump (gaps jumpable)
3. Geometry must be well formed (positive sizes, ordered bands)

A config that fails an "error" check raises ConfigurationError. Warnings
are recorded but do not block generation.
"""

from dataclasses import dataclass
from typing import List

from .config import KinematicsConstants, LayoutConfig, GenerationConfig
from .kinematics import JumpKinematics


@dataclass
class ConstraintViolation:
    """Describes a constraint violation."""
    param: str
    message: str
    severity: str  # "error" = cannot generate, "warning" = generates with degraded layouts


@dataclass
class ConstraintResult:
    """Result of constraint validation."""
    valid: bool
    violations: List[ConstraintViolation]

    def __bool__(self) -> bool:
        return self.valid

    @property
    def errors(self) -> List[ConstraintViolation]:
        return [v for v in self.violations if v.severity == "error"]


class ConfigurationError(ValueError):
    """Invalid configuration, rejected before generation starts."""

    def __init__(self, violations: List[ConstraintViolation]):
        self.violations = violations
        details = "; ".join(f"{v.param}: {v.message}" for v in violations)
        super().__init__(f"Invalid generation config: {details}")


class GenerationExhausted(RuntimeError):
    """Strict mode only: the generator could not verify a placement."""

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(message)


def _result(violations: List[ConstraintViolation]) -> ConstraintResult:
    errors = [v for v in violations if v.severity == "error"]
    return ConstraintResult(valid=len(errors) == 0, violations=violations)


class ParameterConstraints:
    """Defines and checks constraints on generation parameters."""

    @classmethod
    def validate_kinematics(cls, kinematics: KinematicsConstants) -> ConstraintResult:
        """Gravity, jump velocity and horizontal speed must all be positive."""
        violations = []

        for name in ("gravity", "jump_velocity", "horizontal_speed"):
            value = getattr(kinematics, name)
            if value <= 0:
                violations.append(ConstraintViolation(
                    name,
                    f"{name} must be positive, got {value}",
                    "error"
                ))

        return _result(violations)

    @classmethod
    def validate_layout(cls, layout: LayoutConfig, kinematics: KinematicsConstants) -> ConstraintResult:
        """Validate layout thresholds against the jump they must respect."""
        violations = []

        if layout.world_width <= 0:
            violations.append(ConstraintViolation(
                "world_width", f"World width {layout.world_width} must be positive", "error"
            ))
        if layout.platform_height <= 0:
            violations.append(ConstraintViolation(
                "platform_height", f"Platform height {layout.platform_height} must be positive", "error"
            ))
        if not layout.platform_widths or min(layout.platform_widths) <= 0:
            violations.append(ConstraintViolation(
                "platform_widths", "Width palette must be non-empty and positive", "error"
            ))
        if layout.min_altitude > layout.max_altitude:
            violations.append(ConstraintViolation(
                "min_altitude",
                f"Altitude band [{layout.min_altitude}, {layout.max_altitude}] is inverted",
                "error"
            ))
        if layout.y_retries < 0:
            violations.append(ConstraintViolation(
                "y_retries", "Retry count cannot be negative", "error"
            ))
        if layout.stall_limit < 1:
            violations.append(ConstraintViolation(
                "stall_limit", "Stall limit must be at least 1", "error"
            ))
        if layout.min_gap <= 0:
            violations.append(ConstraintViolation(
                "min_gap", f"Min gap {layout.min_gap} must be positive", "error"
            ))
        elif layout.platform_widths:
            # A stalled path resumes from the blocking platform's right edge
            clearance = max(layout.platform_widths) / 2 + layout.min_spacing
            if layout.min_gap <= clearance:
                violations.append(ConstraintViolation(
                    "min_gap",
                    f"Min gap {layout.min_gap} must exceed half the widest platform plus spacing ({clearance:.1f})",
                    "error"
                ))

        # Cross-parameter checks only make sense for a valid jump
        if cls.validate_kinematics(kinematics):
            model = JumpKinematics(kinematics)
            longest_gap = model.safe_jump_distance * layout.gap_reach_factor
            if layout.min_gap > longest_gap:
                violations.append(ConstraintViolation(
                    "min_gap",
                    f"Min gap {layout.min_gap} > longest safe gap {longest_gap:.1f} (given kinematics)",
                    "error"
                ))
            if layout.max_rise > model.max_jump_height:
                violations.append(ConstraintViolation(
                    "max_rise",
                    f"Max rise {layout.max_rise} > jump height {model.max_jump_height:.1f}; "
                    f"more y retries will fall back",
                    "warning"
                ))

        return _result(violations)

    @classmethod
    def validate_config(cls, config: GenerationConfig) -> ConstraintResult:
        """Validate full generation config."""
        all_violations = []

        kinematics_result = cls.validate_kinematics(config.kinematics)
        all_violations.extend(kinematics_result.violations)

        layout_result = cls.validate_layout(config.layout, config.kinematics)
        all_violations.extend(layout_result.violations)

        return _result(all_violations)


def require_valid(config: GenerationConfig) -> ConstraintResult:
    """Validate ``config`` or raise ConfigurationError listing the errors."""
    result = ParameterConstraints.validate_config(config)
    if not result.valid:
        raise ConfigurationError(result.errors)
    return result
