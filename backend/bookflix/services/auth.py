from __future__ import annotations
import hmac

from sqlalchemy import text
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from bookflix.logs import get_logger

LOG = get_logger("bookflix.auth")

# werkzeug's "method$salt$hash" layout
_HASH_METHODS = ("scrypt", "pbkdf2")


def is_password_hash(stored: str) -> bool:
    method, sep, rest = stored.partition("$")
    return bool(sep) and rest.count("$") == 1 and method.split(":", 1)[0] in _HASH_METHODS


def create_user(db: Session, username: str, password: str) -> None:
    """Insert a login row. A taken username surfaces as IntegrityError from the unique key."""
    db.execute(
        text("INSERT INTO login (username, password) VALUES (:u, :p)"),
        {"u": username, "p": generate_password_hash(password)},
    )
    db.commit()


def verify_login(db: Session, username: str, password: str) -> bool:
    """
    Check `password` against the stored hash. Rows loaded from older dumps
    hold the password in plain text; on a match they are re-hashed in place.
    """
    stored = db.execute(
        text("SELECT password FROM login WHERE username = :u"),
        {"u": username},
    ).scalar()
    if stored is None:
        return False
    if is_password_hash(stored):
        try:
            return check_password_hash(stored, password)
        except ValueError:
            LOG.warning("unreadable password hash for %r", username)
            return False

    if not hmac.compare_digest(stored.encode("utf-8"), password.encode("utf-8")):
        return False
    db.execute(
        text("UPDATE login SET password = :p WHERE username = :u"),
        {"u": username, "p": generate_password_hash(password)},
    )
    db.commit()
    LOG.info("re-hashed legacy password for %r", username)
    return True
