# -*- coding: utf-8 -*-
"""
SQLAlchemy модели — инфраструктурный слой.

Связь Role ↔ Person — many-to-many через таблицу person_roles:
- удаление человека каскадно удаляет его назначения
- удаление назначенной роли отклоняется внешним ключом
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


person_roles = Table(
    "person_roles",
    Base.metadata,
    Column(
        "person_id",
        Integer,
        ForeignKey("persons.id", ondelete="CASCADE"),
        primary_key=True
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id"),
        primary_key=True
    ),
)


class RoleModel(Base):
    """SQLAlchemy модель роли."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)

    persons = relationship(
        "PersonModel",
        secondary=person_roles,
        back_populates="roles",
        order_by="PersonModel.id",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<RoleModel(id={self.id}, name='{self.name}')>"


class PersonModel(Base):
    """SQLAlchemy модель человека."""

    __tablename__ = "persons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    middle_name = Column(String(255))
    last_name = Column(String(255), nullable=False)

    roles = relationship(
        "RoleModel",
        secondary=person_roles,
        back_populates="persons",
        order_by="RoleModel.id",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<PersonModel(id={self.id}, last_name='{self.last_name}')>"


class UserModel(Base):
    """SQLAlchemy модель пользователя."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(64), nullable=False, comment="SHA-256 hex digest")

    def __repr__(self):
        return f"<UserModel(id={self.id}, username='{self.username}')>"
