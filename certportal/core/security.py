# certportal/core/security.py
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str, rounds: int) -> str:
    """bcrypt com o custo configurado (BCRYPT_SALT_ROUNDS)."""
    return pwd_context.handler("bcrypt").using(rounds=rounds).hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    # o custo vem embutido no próprio hash
    return pwd_context.verify(plain, hashed)
