"""
Custom exception hierarchy for the Cartoproj engine.

This module defines the exceptions raised by projection construction,
descriptor parsing, numerical inversion, shape reprojection and the grid
container, so callers can handle each failure class consistently.
"""

from typing import Any, Dict, List, Optional


class CartoprojException(Exception):
    """
    Base exception for all Cartoproj-specific errors.

    All custom exceptions inherit from this base class to allow for unified
    exception handling by callers.

    Attributes:
        error_code: String identifier for the error type
        message: User-friendly error message
        details: Technical details for logging/debugging
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize CartoprojException.

        Args:
            message: User-friendly error message
            error_code: String identifier for the error type
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for structured logs.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}')"
        )


class ConfigurationError(CartoprojException):
    """
    Raised when engine settings are invalid.

    Used for invalid environment variables or settings values.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: User-friendly error message
            config_key: Configuration key that is invalid
            details: Technical details about the configuration error
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        default_suggestions = [
            "Check CARTOPROJ_* environment variables are set correctly",
            "Verify .env file syntax",
        ]

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class ProjectionError(CartoprojException):
    """
    Base class for projection failures.

    Attributes in details identify the projection involved when known.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "PROJECTION_ERROR",
        projection: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ProjectionError.

        Args:
            message: User-friendly error message
            error_code: Specific projection error code
            projection: Name or descriptor of the projection involved
            details: Technical details about the failure
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if projection:
            error_details["projection"] = projection

        super().__init__(
            message=message,
            error_code=error_code,
            details=error_details,
            suggestions=suggestions,
        )


class ProjectionConfigurationError(ProjectionError):
    """
    Raised when a projection cannot be constructed from its configuration.

    Covers unparseable descriptors and out-of-range parameters. The caller
    may recover by substituting the Unknown projection.
    """

    def __init__(
        self,
        message: str,
        descriptor: Optional[str] = None,
        error_code: str = "PROJECTION_CONFIGURATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ProjectionConfigurationError.

        Args:
            message: User-friendly error message
            descriptor: Projection descriptor that failed
            error_code: Specific error code
            details: Technical details about the failure
            suggestions: List of suggestions for fixing the descriptor
        """
        default_suggestions = [
            "Use one of: Geographic, HRAP, Unknown, UTM,<zone>[,...]",
            "Check the projection descriptor in the configuration file",
        ]

        super().__init__(
            message=message,
            error_code=error_code,
            projection=descriptor,
            details=details,
            suggestions=suggestions or default_suggestions,
        )


class UnrecognizedProjectionError(ProjectionConfigurationError):
    """Raised when a descriptor names an unknown projection family."""

    def __init__(self, descriptor: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize UnrecognizedProjectionError.

        Args:
            descriptor: The descriptor that could not be recognized
            details: Technical details about the failure
        """
        super().__init__(
            message=f'Unknown projection "{descriptor}"',
            descriptor=descriptor,
            error_code="UNRECOGNIZED_PROJECTION",
            details=details,
        )


class InvalidZoneError(ProjectionConfigurationError):
    """Raised when a UTM zone is missing, non-numeric or outside 1..60."""

    def __init__(
        self,
        zone: Any,
        descriptor: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize InvalidZoneError.

        Args:
            zone: The offending zone value
            descriptor: Descriptor the zone came from, if any
            details: Technical details about the failure
        """
        error_details = details or {}
        error_details["zone"] = zone

        super().__init__(
            message=f"Illegal UTM zone number {zone}",
            descriptor=descriptor,
            error_code="INVALID_ZONE",
            details=error_details,
            suggestions=[
                "UTM zone magnitude must be between 1 and 60",
                "Use a negative zone for the southern hemisphere",
            ],
        )


class UnrecognizedDatumError(ProjectionConfigurationError):
    """Raised in strict mode when a datum name is not recognized."""

    def __init__(self, datum: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize UnrecognizedDatumError.

        Args:
            datum: The datum name that was not recognized
            details: Technical details about the failure
        """
        error_details = details or {}
        error_details["datum"] = datum

        super().__init__(
            message=f'Unrecognized datum "{datum}"',
            error_code="UNRECOGNIZED_DATUM",
            details=error_details,
            suggestions=["Use NAD27, NAD83 or Sphere"],
        )


class ProjectionConvergenceError(ProjectionError):
    """
    Raised when an iterative inverse transform fails to converge.

    The iteration is bounded, so this is reported instead of looping.
    """

    def __init__(
        self,
        message: str,
        projection: Optional[str] = None,
        iterations: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize ProjectionConvergenceError.

        Args:
            message: User-friendly error message
            projection: Name of the projection
            iterations: Number of iterations performed
            details: Technical details such as the input coordinates
        """
        error_details = details or {}
        if iterations is not None:
            error_details["iterations"] = iterations

        super().__init__(
            message=message,
            error_code="PROJECTION_CONVERGENCE_ERROR",
            projection=projection,
            details=error_details,
            suggestions=[
                "Verify the projected coordinates lie within the projection's domain",
                "Set CARTOPROJ_STRICT_CONVERGENCE=false for the legacy (0, 0) fallback",
            ],
        )


class GeometryError(CartoprojException):
    """
    Raised when shape processing fails.

    Used for malformed shapes or mismatched coordinate arrays.
    """

    def __init__(
        self,
        message: str,
        geometry_type: Optional[str] = None,
        error_code: str = "GEOMETRY_ERROR",
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GeometryError.

        Args:
            message: User-friendly error message
            geometry_type: Type of geometry that caused the error
            error_code: Specific geometry error code
            details: Technical details about the geometry error
            suggestions: List of suggestions for fixing the geometry
        """
        error_details = details or {}
        if geometry_type:
            error_details["geometry_type"] = geometry_type

        super().__init__(
            message=message,
            error_code=error_code,
            details=error_details,
            suggestions=suggestions or ["Verify geometry coordinates are valid"],
        )


class UnsupportedShapeError(GeometryError):
    """Raised when the shape dispatcher receives a variant it cannot project."""

    def __init__(self, shape: Any):
        """
        Initialize UnsupportedShapeError.

        Args:
            shape: The object that could not be projected
        """
        type_name = type(shape).__name__
        super().__init__(
            message=f"Cannot project shape of type {type_name}",
            geometry_type=type_name,
            error_code="UNSUPPORTED_SHAPE",
            suggestions=[
                "Use one of the cartoproj.models.shapes variants",
                "Set CARTOPROJ_STRICT_SHAPES=false to pass unknown shapes through",
            ],
        )


class GridError(CartoprojException):
    """
    Raised when a grid operation receives invalid dimensions.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GridError.

        Args:
            message: User-friendly error message
            details: Technical details about the grid error
            suggestions: List of suggestions for resolution
        """
        super().__init__(
            message=message,
            error_code="GRID_ERROR",
            details=details,
            suggestions=suggestions or ["Rows and columns must be at least 1"],
        )
