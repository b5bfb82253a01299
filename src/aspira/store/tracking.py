"""Tracking code generation."""

import random
import re

TRACKING_PREFIX = "DAGM-"
TRACKING_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
TRACKING_LENGTH = 8

TRACKING_CODE_RE = re.compile(rf"^{TRACKING_PREFIX}[A-Z0-9]{{{TRACKING_LENGTH}}}$")


def generate_tracking_code(rng: random.Random | None = None) -> str:
    """Generate a human-shareable tracking code like ``DAGM-7K2QX9PA``.

    Args:
        rng: Random source. Defaults to the module-level generator.

    Returns:
        The prefix followed by 8 characters drawn uniformly from A-Z0-9.
    """
    chooser = rng or random
    return TRACKING_PREFIX + "".join(chooser.choices(TRACKING_ALPHABET, k=TRACKING_LENGTH))


def is_tracking_code(value: str) -> bool:
    """Check whether a string has the tracking code format."""
    return bool(TRACKING_CODE_RE.match(value))
