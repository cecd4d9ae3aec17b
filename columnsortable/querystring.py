from collections import OrderedDict
from collections.abc import Mapping
from urllib.parse import urlencode

from .direction import direction_parameter_name, sort_parameter_name
from .request import RepeatedValue

# Never carried over from the current request.
RESET_PARAMETERS = ('page',)


def _keep(value):
    if isinstance(value, (list, tuple, Mapping)):
        return True
    return value is not None and str(value) != ''


def persisted_parameters(sort_request, prefix=''):
    """Current query parameters minus sort/direction/page and empty values"""
    params = sort_request.except_keys(
        sort_parameter_name(prefix),
        direction_parameter_name(prefix),
        *RESET_PARAMETERS
    )
    return OrderedDict((k, v) for k, v in params.items() if _keep(v))


def _flatten(key, value, pairs):
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _flatten(f'{key}[{sub_key}]', sub_value, pairs)
    elif isinstance(value, RepeatedValue):
        for sub_value in value:
            _flatten(key, sub_value, pairs)
    elif isinstance(value, (list, tuple)):
        for index, sub_value in enumerate(value):
            _flatten(f'{key}[{index}]', sub_value, pairs)
    elif value is None:
        return
    elif value is True or value is False:
        pairs.append((key, '1' if value else '0'))
    else:
        pairs.append((key, str(value)))


def http_build_query(params):
    """Serialize params in insertion order, nesting lists/dicts as ``key[i]``.

    A RepeatedValue is written as the same key once per value.
    """
    pairs = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return urlencode(pairs)


def merge_parameters(*groups):
    """Merge mappings left to right; a later value wins but keeps the first position."""
    merged = OrderedDict()
    for group in groups:
        for key, value in group.items():
            merged[key] = value
    return merged


def build_query_string(extra_query_params, persisted, sort_key, direction, prefix=''):
    merged = merge_parameters(
        extra_query_params,
        persisted,
        {
            sort_parameter_name(prefix): sort_key,
            direction_parameter_name(prefix): direction,
        },
    )
    return http_build_query(merged)
