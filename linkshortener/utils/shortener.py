"""Shortcode generation utility

This module provides the alias generator used when a client doesn't ask for
a custom alias.

Functions:
    generate_shortcode(length=7):
        Generate a random Base62 string suitable for use as a URL slug.

Example:
    >>> from linkshortener.utils import generate_shortcode
    >>> generate_shortcode()
    'q7ZkP0a'
"""

import secrets
import string

from linkshortener.constants import Shortcode


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # Base62: 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(length: int = Shortcode.LENGTH) -> str:
    """Generate a random, URL-safe alias.

    Characters are drawn from a CSPRNG (`secrets`), so aliases can't be
    enumerated from previously issued ones.

    Args:
        length (int, optional):
            Number of characters in the alias. Defaults to 7.

    Returns:
        str: A random alphanumeric alias.

    NOTE:
        - With 62**7 possible aliases a collision is extremely unlikely but
          not impossible. Callers must still insert conditionally and
          regenerate on conflict (see URLMappingService.shorten()).
        - The alphabet is Base62 safe: [a-zA-Z0-9].
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
