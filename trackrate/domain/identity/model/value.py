"""Value objects for the identity domain."""

from typing import NewType

UserId = NewType("UserId", int)
GuestId = NewType("GuestId", int)

MIN_DISPLAY_NAME_LENGTH = 2
