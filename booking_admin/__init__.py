"""Booking Admin: клиент API и сессия администратора."""

__version__ = "0.1.0"
