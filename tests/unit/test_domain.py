"""
Unit tests для доменных объектов и классификации ошибок хранилища.
"""

from sqlalchemy.exc import IntegrityError

from rolebook.domain.entities.person import Person
from rolebook.domain.entities.role import Role
from rolebook.domain.entities.user import User
from rolebook.domain.value_objects.entity_ref import EntityRef
from rolebook.domain.value_objects.person_name import PersonName
from rolebook.infrastructure.persistence.base_repository import translate_integrity_error
from rolebook.infrastructure.security.password import sha256_hex
from rolebook.shared.exceptions.infrastructure_exceptions import (
    DuplicateKeyError,
    ReferentialConstraintError,
)


def test_person_name_skips_empty_middle_name():
    """Тест отображаемого имени без отчества."""
    assert str(PersonName("Ivan", "Petrov")) == "Ivan Petrov"
    assert str(PersonName("Ivan", "Petrov", "")) == "Ivan Petrov"
    assert str(PersonName("Ivan", "Petrov", "Sergeevich")) == "Ivan Sergeevich Petrov"


def test_entity_ref_falls_back_to_id():
    assert str(EntityRef(7)) == "7"
    assert str(EntityRef(7, "Admin")) == "Admin"


def test_role_and_person_names():
    """Тест списков имён связанных записей."""
    role = Role(id=1, name="Admin", persons=[EntityRef(1, "Ivan Petrov"), EntityRef(2, "Anna Smirnova")])
    person = Person(id=1, name=PersonName("Ivan", "Petrov"), roles=[EntityRef(1, "Admin"), EntityRef(3)])

    assert role.person_names() == ["Ivan Petrov", "Anna Smirnova"]
    assert person.role_ids == [1, 3]


def test_user_repr_hides_password():
    """Тест: пароль не попадает в repr (и в логи)."""
    user = User(id=1, username="admin", password=sha256_hex("secret"))

    assert "secret" not in repr(user)
    assert user.password not in repr(user)


def test_sha256_hex():
    digest = sha256_hex("secret")

    assert len(digest) == 64
    assert digest == "2bb80d537b1da3e38bd30361aa855686bde0eacd7162fef6a25fe97bf527a25b"


class _DriverError(Exception):

    def __init__(self, message, sqlstate=None):
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity_error(message, sqlstate=None):
    return IntegrityError("INSERT ...", {}, _DriverError(message, sqlstate))


def test_translate_unique_violation():
    """Тест классификации нарушения уникальности (SQLite и PostgreSQL)."""
    assert isinstance(translate_integrity_error(_integrity_error("UNIQUE constraint failed: roles.name")), DuplicateKeyError)
    assert isinstance(translate_integrity_error(_integrity_error("anything", "23505")), DuplicateKeyError)


def test_translate_foreign_key_violation():
    assert isinstance(translate_integrity_error(_integrity_error("FOREIGN KEY constraint failed")), ReferentialConstraintError)
    assert isinstance(translate_integrity_error(_integrity_error("anything", "23503")), ReferentialConstraintError)


def test_translate_unknown_violation():
    """Тест: нераспознанное нарушение не переводится."""
    assert translate_integrity_error(_integrity_error("NOT NULL constraint failed: roles.name")) is None
