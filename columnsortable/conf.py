from dataclasses import dataclass, field, fields

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

DIRECTIONS = ('asc', 'desc')


@dataclass(frozen=True)
class SortableConfig:
    """Options for rendering sortable links.

    Mirrors the keys accepted in ``settings.COLUMNSORTABLE``. Build one with
    ``SortableConfig.from_settings()`` or pass keyword overrides directly.
    """
    uri_relation_column_separator: str = '.'
    inject_title_as: str = None
    format_custom_titles: bool = True
    formatting_function: object = None
    default_icon_set: str = 'fa fa-sort'
    sortable_icon: str = 'fa fa-sort'
    columns: list = field(default_factory=list)
    asc_suffix: str = '-asc'
    desc_suffix: str = '-desc'
    default_direction_unsorted: str = 'asc'
    enable_icons: bool = True
    icon_text_separator: str = ''
    clickable_icon: bool = False
    anchor_class: str = None
    active_anchor_class: str = None
    direction_anchor_class_prefix: str = None

    def __post_init__(self):
        if self.default_direction_unsorted not in DIRECTIONS:
            raise ImproperlyConfigured(
                "COLUMNSORTABLE['default_direction_unsorted'] must be 'asc' or 'desc', "
                f"got {self.default_direction_unsorted!r}"
            )

    @classmethod
    def from_settings(cls, **overrides):
        options = getattr(settings, 'COLUMNSORTABLE', None) or {}
        if not isinstance(options, dict):
            raise ImproperlyConfigured("COLUMNSORTABLE setting must be a dict")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ImproperlyConfigured(
                f"Unknown COLUMNSORTABLE option(s): {', '.join(unknown)}"
            )

        values = dict(options)
        values.update(overrides)
        return cls(**values)

    def suffix_for(self, direction):
        """Icon/class suffix for a direction; anything but 'asc' counts as desc."""
        return self.asc_suffix if direction == 'asc' else self.desc_suffix

    def get_formatting_function(self):
        func = self.formatting_function
        if func is None:
            return None
        if isinstance(func, str):
            try:
                return import_string(func)
            except ImportError as e:
                raise ImproperlyConfigured(
                    f"COLUMNSORTABLE['formatting_function'] could not be imported: {e}"
                ) from e
        return func
