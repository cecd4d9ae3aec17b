import logging

from django.utils.encoding import iri_to_uri
from django.utils.safestring import SafeData

from .anchor import (
    INSIDE,
    OUTSIDE,
    RenderResult,
    anchor_classes,
    build_attributes,
    build_href,
    render_anchor,
)
from .conf import SortableConfig
from .direction import SortState, determine_direction
from .parameters import LinkSpec, parse_parameters
from .querystring import build_query_string, persisted_parameters
from .request import SortRequest

logger = logging.getLogger(__name__)


def format_title(title, column, config, formatter=None):
    """Apply the formatting function to a title.

    Trusted markup is returned untouched. A missing title falls back to the
    column name and is always formatted; custom titles only when
    ``format_custom_titles`` is on.
    """
    if isinstance(title, SafeData):
        return title

    if title is None:
        title = column
    elif not config.format_custom_titles:
        return title

    formatter = formatter or config.get_formatting_function()
    if formatter is not None:
        title = formatter(title)
    return title


class SortableLink:
    """Renders sortable column-header anchors for one request."""

    def __init__(self, request, config=None, formatter=None, resolve_url=None):
        self.request = SortRequest(request)
        self.config = config or SortableConfig.from_settings()
        self.formatter = formatter
        self.resolve_url = resolve_url or iri_to_uri

    def parse(self, parameters):
        return parse_parameters(parameters, self.config.uri_relation_column_separator)

    def render(self, *parameters):
        if len(parameters) == 1 and isinstance(parameters[0], LinkSpec):
            spec = parameters[0]
        else:
            spec = self.parse(parameters)
        return self.render_spec(spec)

    def render_spec(self, spec):
        config = self.config
        column = spec.column
        prefix = spec.query_prefix

        title = format_title(spec.title, column, config, self.formatter)

        injected_title = None
        if config.inject_title_as:
            injected_title = (config.inject_title_as, title)

        state = SortState.from_request(self.request, prefix)
        icon, direction = determine_direction(column, spec.sort_key, state, config)

        query_string = build_query_string(
            spec.extra_query_params,
            persisted_parameters(self.request, prefix),
            spec.sort_key,
            direction,
            prefix,
        )
        href = build_href(query_string, spec.anchor_attributes, self.request.path, self.resolve_url)
        classes = anchor_classes(column, prefix, state, spec.anchor_attributes, config)

        html = render_anchor(
            href,
            classes,
            build_attributes(spec.anchor_attributes),
            title,
            icon,
            config,
        )
        logger.debug("Rendered sortable link for %s -> %s", spec.sort_key, href)

        return RenderResult(
            href=href,
            css_classes=classes,
            icon_class=icon if config.enable_icons else None,
            title=title,
            icon_placement=INSIDE if config.clickable_icon else OUTSIDE,
            html=html,
            injected_title=injected_title,
        )

    def propagate(self, result):
        """Write the mirrored title, if any, into the request."""
        if result.injected_title is not None:
            key, title = result.injected_title
            self.request.merge(key, title)


def sortable_link(request, *parameters, config=None, formatter=None, resolve_url=None):
    """Render a sortable anchor for ``request`` and return its HTML.

    Usage::

        sortable_link(request, 'name')
        sortable_link(request, 'author.name', 'Author', 'books_', {'tab': 'all'}, {'id': 'x'})
    """
    link = SortableLink(request, config=config, formatter=formatter, resolve_url=resolve_url)
    result = link.render(*parameters)
    link.propagate(result)
    return result.html
