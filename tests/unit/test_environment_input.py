import os

import pytest

from lambda_inputs.input_sources.environment import EnvironmentInput
from lambda_inputs.input_sources.errors import InputTypeError, MissingValue

TEST_VARIABLE = 'LAMBDA_INPUTS_TEST_VARIABLE'


def test_reads_given_mapping():
    env = EnvironmentInput({'PORT': '8080'})
    assert env.has('PORT')
    assert env.get_string('PORT') == '8080'
    assert env.get_as_int('PORT') == 8080


def test_values_are_stored_as_text():
    environ = {}
    env = EnvironmentInput(environ)
    env.set_int('PORT', 8080)
    env.set_bool('DEBUG', True)
    assert environ == {'PORT': '8080', 'DEBUG': 'True'}
    with pytest.raises(InputTypeError):
        env.get_int('PORT')
    assert env.get_as_bool('DEBUG') is True


def test_missing_variable():
    env = EnvironmentInput({})
    assert not env.has('HOME_DIR')
    with pytest.raises(MissingValue) as exc_info:
        env.get('HOME_DIR')
    assert str(exc_info.value) == 'The key HOME_DIR is missing'
    assert env.get('HOME_DIR', '/tmp') == '/tmp'


def test_reads_live_process_environment(monkeypatch):
    monkeypatch.delenv(TEST_VARIABLE, raising=False)
    env = EnvironmentInput()
    assert not env.has(TEST_VARIABLE)

    # changed after the source was created
    monkeypatch.setenv(TEST_VARIABLE, 'first')
    assert env.get(TEST_VARIABLE) == 'first'
    monkeypatch.setenv(TEST_VARIABLE, 'second')
    assert env.get(TEST_VARIABLE) == 'second'


def test_writes_through_to_process_environment(monkeypatch):
    monkeypatch.setenv(TEST_VARIABLE, 'placeholder')
    env = EnvironmentInput()
    env.set(TEST_VARIABLE, 42)
    assert os.environ[TEST_VARIABLE] == '42'
    assert os.getenv(TEST_VARIABLE) == '42'
