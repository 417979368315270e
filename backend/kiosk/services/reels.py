import random
from typing import Dict

from kiosk.models import REEL_NAMES

BANANA_VALUE = 3_000_000

# Denominations a reel can land on. The banana shares the 3M premium value and
# is listed separately, so 3M comes up twice as often as any other entry.
REEL_VALUES = (
    # Low tier
    200_000, 250_000, 300_000,
    # Medium tier
    375_000, 450_000, 550_000,
    # High tier
    750_000, 1_000_000,
    # Premium tier
    1_500_000, 3_000_000,
    # Banana
    BANANA_VALUE,
)


def generate() -> int:
    """Pull a single reel."""
    return random.choice(REEL_VALUES)


def generate_all() -> Dict[str, int]:
    """Pull all five reels independently; repeats across reels are expected."""
    return {name: generate() for name in REEL_NAMES}
