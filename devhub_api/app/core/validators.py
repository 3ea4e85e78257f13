"""
Input validation helpers shared by the endpoints.
"""

import re


class ValidationError(ValueError):
    """Raised when a request value fails validation."""


# GitHub login rules: letters, digits and single hyphens between them,
# no leading or trailing hyphen, at most 39 characters.
GITHUB_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9]|-(?=[a-zA-Z0-9])){0,38}$")


def validate_username(username: str) -> str:
    """Validate a GitHub username and return it unchanged.

    Raises:
        ValidationError: If the username is blank or malformed.
    """
    if not username or not username.strip():
        raise ValidationError("GitHub username must not be empty")
    if not GITHUB_USERNAME_PATTERN.fullmatch(username):
        raise ValidationError("Invalid GitHub username format")
    return username
