import secrets
import string

ALPHABET = string.ascii_uppercase + string.digits


def generate_short_id(length: int = 5) -> str:
    """
    Return a random, human-shareable identifier of `length` characters
    drawn from uppercase ASCII letters and digits.
    """
    if length < 1:
        raise ValueError(f"Short ID length must be at least 1, got {length}")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))
