from sqlalchemy import Column, String, Enum as SQLEnum
from goods_transport.db.base import BaseModel
from goods_transport.models.shared.enums import UserRole

class User(BaseModel):
    __tablename__ = "users"

    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.OPERATOR)

    def __repr__(self):
        return f"<User {self.username}>"
