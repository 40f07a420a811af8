import itertools
from datetime import datetime, timezone

import pytest

from lambda_inputs.input_sources.errors import InputTypeError, MissingValue
from lambda_inputs.input_sources.params import BodyParams, QueryParams

SAMPLES = {
    'string': 'text',
    'int': 5,
    'float': 2.5,
    'bool': True,
    'array': [1, 2],
    'datetime': datetime(2024, 1, 15, tzinfo=timezone.utc),
}

GETTERS = {
    'string': 'get_string',
    'int': 'get_int',
    'float': 'get_float',
    'bool': 'get_bool',
    'array': 'get_array',
    'datetime': 'get_datetime',
}

MISMATCHES = [(requested, stored) for requested, stored in itertools.product(GETTERS, SAMPLES) if requested != stored]


@pytest.fixture
def source():
    return QueryParams({})


def test_get_missing_key_without_default(source):
    with pytest.raises(MissingValue) as exc_info:
        source.get('missing')
    assert exc_info.value.key == 'missing'
    assert str(exc_info.value) == 'The key missing is missing'


def test_get_missing_key_returns_default(source):
    assert source.get('missing', 'fallback') == 'fallback'


@pytest.mark.parametrize('default', [0, '', False, []])
def test_falsy_defaults_are_not_absent(source, default):
    assert source.get('missing', default) == default


def test_stored_value_wins_over_default(source):
    source.set('key', 'stored')
    assert source.get('key', 'fallback') == 'stored'


@pytest.mark.parametrize('kind', SAMPLES)
def test_set_then_get_round_trip(source, kind):
    value = SAMPLES[kind]
    source.set('key', value)
    assert source.has('key')
    assert 'key' in source
    assert source.get('key') is value
    assert source.get('key', 'anything') is value


@pytest.mark.parametrize('kind', SAMPLES)
def test_validated_getter_returns_matching_kind(source, kind):
    source.set('key', SAMPLES[kind])
    assert getattr(source, GETTERS[kind])('key') is SAMPLES[kind]


@pytest.mark.parametrize('requested, stored', MISMATCHES)
def test_validated_getter_rejects_other_kinds(source, requested, stored):
    source.set('key', SAMPLES[stored])
    with pytest.raises(InputTypeError) as exc_info:
        getattr(source, GETTERS[requested])('key')
    assert exc_info.value.expected == requested
    assert exc_info.value.actual == stored


def test_validated_getter_raises_missing_value(source):
    with pytest.raises(MissingValue):
        source.get_int('missing')


def test_validated_getter_checks_default(source):
    assert source.get_int('missing', 7) == 7
    with pytest.raises(InputTypeError):
        source.get_int('missing', '7')


def test_get_array_accepts_tuples_and_mappings(source):
    source.set('pair', (1, 2))
    source.set('mapping', {'a': 1})
    assert source.get_array('pair') == (1, 2)
    assert source.get_array('mapping') == {'a': 1}


def test_scenario_count(source):
    source.set('count', 5)
    assert source.get_int('count') == 5
    with pytest.raises(InputTypeError) as exc_info:
        source.get_string('count')
    assert str(exc_info.value) == 'Expected value of type string, got int'
    assert source.get_as_string('count') == '5'


def test_coercing_getters(source):
    source.set('number', '42')
    assert source.get_as_int('number') == 42
    assert source.get_as_float('number') == 42.0
    assert source.get_as_bool('number') is True
    assert source.get_as_string('number') == '42'


def test_coercing_getter_uses_default(source):
    assert source.get_as_int('missing', 3) == 3
    with pytest.raises(MissingValue):
        source.get_as_int('missing')


def test_get_as_array_wraps_scalar(source):
    source.set('tag', 'red')
    assert source.get_as_array('tag') == ['red']


def test_get_as_array_keeps_container(source):
    tags = ['red', 'blue']
    source.set('tag', tags)
    assert source.get_as_array('tag') is tags


def test_get_as_datetime_parses_text(source):
    source.set('since', '2024-01-15')
    assert source.get_as_datetime('since') == datetime(2024, 1, 15)


def test_get_as_datetime_unparsable_text(source):
    source.set('since', 'yesterday-ish')
    with pytest.raises(InputTypeError):
        source.get_as_datetime('since')


def test_typed_setters_delegate_to_set(source):
    moment = datetime(2024, 1, 15)
    source.set_string('s', 'text')
    source.set_int('i', 1)
    source.set_float('f', 1.5)
    source.set_bool('b', False)
    source.set_array('a', [1])
    source.set_datetime('d', moment)
    assert source.get_string('s') == 'text'
    assert source.get_int('i') == 1
    assert source.get_float('f') == 1.5
    assert source.get_bool('b') is False
    assert source.get_array('a') == [1]
    assert source.get_datetime('d') is moment


def test_set_overwrites_containers(source):
    source.set('list', [1, 2])
    source.set('list', [3])
    assert source.get('list') == [3]


def test_body_params_missing_message():
    with pytest.raises(MissingValue) as exc_info:
        BodyParams({}).get('name')
    assert exc_info.value.key == 'name'
    assert str(exc_info.value) == 'The key name was not found in the POST data'


def test_params_wrap_the_given_map():
    params = {'page': '2'}
    query = QueryParams(params)
    query.set('size', '10')
    assert params == {'page': '2', 'size': '10'}
    assert QueryParams().has('page') is False


def test_get_as_datetime_rejects_numeric_text(source):
    source.set('since', '5')
    with pytest.raises(InputTypeError):
        source.get_as_datetime('since')
