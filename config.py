import secrets

from decouple import Choices, config
from dotenv import load_dotenv

load_dotenv()


SQLALCHEMY_DATABASE_URL = config("SQLALCHEMY_DATABASE_URL", default="sqlite:///db.sqlite3")

UVICORN_HOST = config("UVICORN_HOST", default="0.0.0.0")
UVICORN_PORT = config("UVICORN_PORT", cast=int, default=8000)
UVICORN_UDS = config("UVICORN_UDS", default=None)

DEBUG = config("DEBUG", cast=bool, default=False)
DOCS = config("DOCS", cast=bool, default=False)

ALLOWED_ORIGINS = config("ALLOWED_ORIGINS", cast=lambda v: [x.strip() for x in v.split(',')] if v else [], default="")

# Signing key is fixed for the lifetime of the process.
JWT_SECRET_KEY = config("JWT_SECRET_KEY", default="")
JWT_SECRET_KEY_GENERATED = not JWT_SECRET_KEY
if JWT_SECRET_KEY_GENERATED:
    JWT_SECRET_KEY = secrets.token_hex(32)
JWT_ALGORITHM = config("JWT_ALGORITHM", default="HS256")
JWT_ACCESS_TOKEN_EXPIRE_MINUTES = config("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", cast=int, default=60)

BCRYPT_ROUNDS = config("BCRYPT_ROUNDS", cast=int, default=10)

DEFAULT_PLAN = config(
    "DEFAULT_PLAN",
    default="discovery",
    cast=Choices(["discovery", "essential", "professional", "enterprise"]),
)
PROVISION_PLANS_ON_STARTUP = config("PROVISION_PLANS_ON_STARTUP", cast=bool, default=True)
