import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def explode_sort_parameter(parameter, separator='.'):
    """Split ``relation.column`` into ``[relation, column]``.

    Returns an empty list when the separator isn't in the parameter.
    """
    if separator not in parameter:
        return []

    parts = parameter.split(separator)
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(parameter, separator)
    return parts


@dataclass(frozen=True)
class LinkSpec:
    sort_key: str
    title: object = None
    query_prefix: str = ''
    extra_query_params: dict = field(default_factory=dict)
    anchor_attributes: dict = field(default_factory=dict)
    separator: str = '.'

    def __post_init__(self):
        # fail early on a bad sort key
        explode_sort_parameter(self.sort_key, self.separator)

    @property
    def relation(self):
        parts = explode_sort_parameter(self.sort_key, self.separator)
        return parts[0] if parts else None

    @property
    def column(self):
        parts = explode_sort_parameter(self.sort_key, self.separator)
        return parts[1] if parts else self.sort_key

    @classmethod
    def build(cls, sort_key, title=None, query_prefix='', extra_query_params=None,
              anchor_attributes=None, separator='.'):
        return cls(
            sort_key=sort_key,
            title=title,
            query_prefix=query_prefix,
            extra_query_params=dict(extra_query_params or {}),
            anchor_attributes=dict(anchor_attributes or {}),
            separator=separator,
        )


def parse_parameters(parameters, separator='.'):
    """Turn positional link arguments into a LinkSpec.

    Order is ``sort_key, title, query_prefix, extra_query_params,
    anchor_attributes``. Trailing arguments of the wrong type are ignored.
    """
    parameters = list(parameters)
    if not parameters:
        raise ConfigurationError('', separator)

    sort_key = parameters[0]
    title = parameters[1] if len(parameters) > 1 else None

    query_prefix = ''
    if len(parameters) > 2:
        if isinstance(parameters[2], str):
            query_prefix = parameters[2]
        else:
            logger.debug("Ignoring non-string query prefix %r", parameters[2])

    extra_query_params = {}
    if len(parameters) > 3:
        if isinstance(parameters[3], Mapping):
            extra_query_params = parameters[3]
        else:
            logger.debug("Ignoring non-mapping query parameters %r", parameters[3])

    anchor_attributes = {}
    if len(parameters) > 4:
        if isinstance(parameters[4], Mapping):
            anchor_attributes = parameters[4]
        else:
            logger.debug("Ignoring non-mapping anchor attributes %r", parameters[4])

    return LinkSpec.build(
        sort_key,
        title=title,
        query_prefix=query_prefix,
        extra_query_params=extra_query_params,
        anchor_attributes=anchor_attributes,
        separator=separator,
    )
