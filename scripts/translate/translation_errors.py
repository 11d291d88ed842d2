#!/usr/bin/env python3
from __future__ import annotations


class TranslationError(Exception):
    pass


class MissingConfigError(TranslationError):
    pass


class ConflictingKeyError(TranslationError, ValueError):
    pass


class MissingPackageError(TranslationError):
    pass


class MismatchedPathError(TranslationError, ValueError):
    pass


class TranslationFormatError(TranslationError, ValueError):
    pass


class AuthenticationError(TranslationError):
    pass


class RemoteFetchError(TranslationError):
    pass
