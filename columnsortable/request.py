from collections import OrderedDict

# Attribute holding values merged into the request by sortable links.
CONTEXT_ATTRIBUTE = 'columnsortable_context'


class RepeatedValue(list):
    """Values of a plain key given more than once, e.g. ``?status=1&status=2``.

    Serialized back as repeated keys rather than ``key[i]``.
    """


def query_to_dict(query_dict):
    """Flatten a QueryDict keeping key order.

    ``tags[]=a&tags[]=b`` becomes a list, repeated plain keys a RepeatedValue,
    everything else keeps its single value.
    """
    params = OrderedDict()
    for key in query_dict.keys():
        values = query_dict.getlist(key)
        if key.endswith('[]'):
            params[key[:-2]] = list(values)
        elif len(values) > 1:
            params[key] = RepeatedValue(values)
        else:
            params[key] = values[-1] if values else ''
    return params


class SortRequest:
    """Read/write access to the parts of an HttpRequest a sortable link uses."""

    def __init__(self, request):
        self._request = request
        self._query = query_to_dict(request.GET)

    @property
    def path(self):
        return self._request.path

    def get(self, key, default=None):
        """Like ``QueryDict.get``: the last value of a repeated key."""
        value = self._query.get(key, default)
        if isinstance(value, RepeatedValue):
            return value[-1]
        return value

    def has(self, key):
        return key in self._query

    def except_keys(self, *keys):
        return OrderedDict((k, v) for k, v in self._query.items() if k not in keys)

    def merge(self, key, value):
        """Store a value in request-scoped storage; the last write wins."""
        context = getattr(self._request, CONTEXT_ATTRIBUTE, None)
        if context is None:
            context = {}
            setattr(self._request, CONTEXT_ATTRIBUTE, context)
        context[key] = value


def get_sortable_context(request):
    """Values merged into ``request`` by sortable links rendered so far."""
    return getattr(request, CONTEXT_ATTRIBUTE, {})
