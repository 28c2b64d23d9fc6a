from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Hash un mot de passe en clair (pbkdf2/scrypt selon la version de werkzeug)."""
    return generate_password_hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return check_password_hash(hashed_password, password)
