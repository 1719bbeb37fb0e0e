# catalog_api/models/user.py
import uuid
import sqlalchemy as sa
from catalog_api.utils.database import Base


class User(Base):
    __tablename__ = "users"
    id = sa.Column(sa.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = sa.Column(sa.String(255), unique=True, nullable=False, index=True)
    # bcrypt hash; the plaintext is never stored
    password_hash = sa.Column(sa.String(512), nullable=False)
    created_at = sa.Column(sa.DateTime(timezone=True), server_default=sa.func.now())
