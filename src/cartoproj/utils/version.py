"""
Version utility functions.
"""

from cartoproj import __version__


def get_version() -> str:
    """
    Get the current version of Cartoproj.

    Returns:
        str: The version string.
    """
    return __version__


def format_version_info() -> dict[str, str]:
    """
    Get formatted version information.

    Returns:
        dict[str, str]: Dictionary containing version information.
    """
    return {
        "version": get_version(),
        "project": "Cartoproj",
        "description": "Cartographic projection and shape reprojection engine",
    }
