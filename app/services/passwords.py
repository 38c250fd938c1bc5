import bcrypt
from starlette.concurrency import run_in_threadpool


async def hash_password(password: str, rounds: int) -> str:
    """Return a bcrypt hash of *password* using ``2 ** rounds`` iterations."""

    def _hash() -> bytes:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds))

    return (await run_in_threadpool(_hash)).decode("utf-8")


async def verify_password(password: str, password_hash: str) -> bool:
    def _check() -> bool:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

    return await run_in_threadpool(_check)
