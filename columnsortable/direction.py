from dataclasses import dataclass

from .conf import DIRECTIONS


def sort_parameter_name(prefix):
    return f'{prefix}sort'


def direction_parameter_name(prefix):
    return f'{prefix}direction'


@dataclass(frozen=True)
class SortState:
    active_sort_value: object = None
    active_direction: object = None
    has_sort: bool = False

    @classmethod
    def from_request(cls, sort_request, prefix=''):
        sort_name = sort_parameter_name(prefix)
        return cls(
            active_sort_value=sort_request.get(sort_name),
            active_direction=sort_request.get(direction_parameter_name(prefix)),
            has_sort=sort_request.has(sort_name),
        )

    def is_active(self, column):
        """True when the request currently sorts by ``column``."""
        return self.has_sort and self.active_sort_value == column


def select_icon(column, config):
    icon = config.default_icon_set
    for group in config.columns:
        if column in group.get('rows', []):
            icon = group['class']
    return icon


def determine_direction(column, sort_key, state, config):
    """Return ``(icon, direction)`` where direction is what the next click sorts by."""
    if state.active_sort_value == sort_key and state.active_direction in DIRECTIONS:
        icon = select_icon(column, config) + config.suffix_for(state.active_direction)
        direction = 'asc' if state.active_direction == 'desc' else 'desc'
        return icon, direction

    return config.sortable_icon, config.default_direction_unsorted
