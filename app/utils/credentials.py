"""Portal/staff credential generation

Logins are derived from the person's name: lowercased, accents stripped, whitespace
replaced by dots, plus a random 4-digit suffix (e.g. "ahmed.ben.ali.4821").
"""

import re
import secrets
import string
import unicodedata

PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%"


def generate_login(name: str) -> str:
    """Generate a login from a display name"""
    normalized = unicodedata.normalize("NFD", name.strip().lower())
    without_accents = "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")
    base_login = re.sub(r"\s+", ".", without_accents)
    suffix = 1000 + secrets.randbelow(9000)
    return f"{base_login}.{suffix}"


def generate_password(length: int = 12) -> str:
    """Generate a random password from letters, digits and !@#$%"""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
