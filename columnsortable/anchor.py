from dataclasses import dataclass

from django.utils.html import conditional_escape
from django.utils.safestring import mark_safe

INSIDE = 'inside'
OUTSIDE = 'outside'

# Attributes handled separately from the rest.
RESERVED_ATTRIBUTES = ('href', 'class')


@dataclass
class RenderResult:
    href: str
    css_classes: list
    icon_class: str | None
    title: str
    icon_placement: str
    html: str = ''
    injected_title: tuple | None = None

    def __str__(self):
        return self.html

    def __html__(self):
        return self.html


def anchor_classes(column, prefix, state, anchor_attributes, config):
    classes = []

    if config.anchor_class is not None:
        classes.append(config.anchor_class)

    active = state.is_active(column)

    if config.active_anchor_class is not None and active:
        classes.append(config.active_anchor_class)

    if config.direction_anchor_class_prefix is not None and active:
        classes.append(config.direction_anchor_class_prefix + config.suffix_for(state.active_direction))

    if 'class' in anchor_attributes:
        classes.extend(str(anchor_attributes['class']).split(' '))

    return classes


def class_attribute(classes):
    if not classes:
        return ''
    return ' class="' + ' '.join(classes) + '"'


def build_attributes(anchor_attributes):
    """Render every attribute but href/class, empty values as bare names."""
    attributes = []
    for key, value in anchor_attributes.items():
        if key in RESERVED_ATTRIBUTES:
            continue
        if value is None or value == '':
            attributes.append(str(key))
        else:
            attributes.append(f'{key}="{conditional_escape(value)}"')

    if not attributes:
        return ''
    return ' ' + ' '.join(attributes)


def build_href(query_string, anchor_attributes, request_path, resolve_url):
    base = anchor_attributes['href'] if 'href' in anchor_attributes else request_path
    return resolve_url(f'{base}?{query_string}')


def trailing_tag(icon, config):
    if not config.enable_icons:
        return '</a>'

    icon_tag = config.icon_text_separator + f'<i class="{icon}"></i>'
    if config.clickable_icon:
        return icon_tag + '</a>'
    return '</a>' + icon_tag


def href_attribute(href):
    """Quote-safe href; ``&`` stays literal since the query is already encoded."""
    return href.replace('"', '&quot;')


def render_anchor(href, classes, attributes_string, title, icon, config):
    """Assemble the final anchor markup."""
    html = (
        '<a' + class_attribute(classes) + ' href="' + href_attribute(href) + '"' + attributes_string + '>'
        + conditional_escape(title)
        + trailing_tag(icon, config)
    )
    return mark_safe(html)
