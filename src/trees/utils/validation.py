"""Input validation utilities for trees."""

from trees.errors import InvalidBranchNameError


def validate_feature_name(name: str | None) -> str:
    """Reject feature names that are empty after trimming.

    The name is returned unchanged; git decides whether it is a valid branch
    name.

    Args:
        name: Feature name supplied by the user

    Returns:
        The name as given

    Raises:
        InvalidBranchNameError: If the name is missing or blank
    """
    if name is None or not name.strip():
        raise InvalidBranchNameError(name or "")
    return name
