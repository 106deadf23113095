"""Shared constants and enums used across the application."""

from enum import StrEnum


class DocumentType(StrEnum):
    """Colombian identity document types for family members."""

    CC = "CC"  # Cédula de ciudadanía
    TI = "TI"  # Tarjeta de identidad
    CE = "CE"  # Cédula de extranjería
    PA = "PA"  # Pasaporte
    RC = "RC"  # Registro civil
    NUIP = "NUIP"


class TokenType(StrEnum):
    """Kinds of signed session tokens."""

    ACCESS = "access"
    REFRESH = "refresh"


REFRESH_KEY_PREFIX = "refresh:"
