"""Rolebook: администрирование ролей, людей и пользователей."""

__version__ = "1.0.0"
