import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    """Stable string identifier shared by stored rows and transient search items."""
    return str(uuid.uuid4())
