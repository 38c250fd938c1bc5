from pydantic import BaseModel, Field, field_validator

BCRYPT_MAX_BYTES = 72


# --- Shared ---

class VersionedRef(BaseModel):
    """Identifies a row together with the version the caller last read."""

    id: int = Field(ge=1)
    version: int = Field(ge=0)


# --- User ---

class UserBase(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    first_name: str = Field(min_length=1, max_length=100)
    second_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(None, max_length=100)
    user_role_name: str | None = Field(None, max_length=50)


def _check_password_bytes(value: str | None) -> str | None:
    # bcrypt refuses (or truncates) anything past 72 encoded bytes.
    if value is not None and len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password must not exceed {BCRYPT_MAX_BYTES} bytes")
    return value


class UserCreate(UserBase):
    password: str = Field(min_length=6, max_length=72)

    password_fits_bcrypt = field_validator("password")(_check_password_bytes)


class UserUpdate(UserBase, VersionedRef):
    password: str | None = Field(None, min_length=6, max_length=72)

    password_fits_bcrypt = field_validator("password")(_check_password_bytes)


class UserDelete(VersionedRef):
    pass


class UserFindArgs(BaseModel):
    ids: list[int] = []
    usernames: list[str] = []


# --- City ---

class CityBase(BaseModel):
    city_name: str = Field(min_length=1, max_length=150)


class CityCreate(CityBase):
    pass


class CityUpdate(CityBase, VersionedRef):
    pass


class CityDelete(VersionedRef):
    pass


# --- Social status ---

class SocialStatusBase(BaseModel):
    social_status_name: str = Field(min_length=1, max_length=150)


class SocialStatusCreate(SocialStatusBase):
    pass


class SocialStatusUpdate(SocialStatusBase, VersionedRef):
    pass


class SocialStatusDelete(VersionedRef):
    pass


# --- Customer ---

class CustomerBase(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    second_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    note: str | None = None
    city_id: int | None = None
    social_status_id: int | None = None


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CustomerBase, VersionedRef):
    pass


class CustomerDelete(VersionedRef):
    pass


def compose_display_name(second_name: str, first_name: str, middle_name: str | None) -> str:
    """Return "<second> <first> <middle>" with empty parts skipped."""
    return " ".join(part for part in (second_name, first_name, middle_name) if part)
