"""Unit tests for the application exception hierarchy."""

import pytest

from fastshortener import exceptions
from fastshortener.exceptions import (
    BadConfigurationError,
    ConfigurationError,
    FastShortenerError,
    GenerationExhaustedError,
    InvalidURLError,
    MissingEnvironmentVariableError,
    NotFoundError,
    ReservedWordError,
    StorePersistenceError,
    StoreTimeoutError,
)


ALL_ERRORS = [
    InvalidURLError,
    ReservedWordError,
    GenerationExhaustedError,
    NotFoundError,
    StorePersistenceError,
    StoreTimeoutError,
    ConfigurationError,
    MissingEnvironmentVariableError,
    BadConfigurationError,
]


@pytest.mark.parametrize('error_cls', ALL_ERRORS)
def test_errors_derive_from_base_error(error_cls):
    assert issubclass(error_cls, FastShortenerError)
    assert error_cls('message').error_code


def test_error_codes_are_unique():
    codes = [error_cls.error_code for error_cls in [FastShortenerError, *ALL_ERRORS]]
    assert len(set(codes)) == len(codes)


def test_every_exception_is_covered():
    defined = {obj for obj in vars(exceptions).values() if isinstance(obj, type) and issubclass(obj, FastShortenerError)}
    assert defined == {FastShortenerError, *ALL_ERRORS}


def test_timeouts_are_persistence_errors():
    assert issubclass(StoreTimeoutError, StorePersistenceError)
    assert not issubclass(NotFoundError, StorePersistenceError)
