from passlib.context import CryptContext

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def bcrypt_input(password: str) -> str:
    """bcrypt only reads the first 72 bytes; cut there, dropping a split trailing character."""
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")


class Hasher:
    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(bcrypt_input(password))

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(bcrypt_input(plain_password), hashed_password)
