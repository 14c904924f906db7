"""
Provides the User model for the application's database schema.

The User model holds the identity that owns projects, joins them as a
member, creates and is assigned tasks, and authors activity records. Users
are created at registration and never deleted by the application.

Attributes
----------
name : sqlalchemy.Column
    Display name chosen at registration.
email : sqlalchemy.Column
    Lower-cased email address, unique across the system.
password_hash : sqlalchemy.Column
    bcrypt hash of the user's password. Never serialised.
"""

from sqlalchemy import Column, String

from .base import BaseModel


class User(BaseModel):
    """
    Represents a user entity in the application.

    :ivar name: Display name of the user.
    :type name: str
    :ivar email: Email address of the user. It must be unique.
    :type email: str
    :ivar password_hash: Hashed password.
    :type password_hash: str
    """

    __tablename__ = "users"

    name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
