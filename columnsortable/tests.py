from django.core.exceptions import ImproperlyConfigured
from django.http import QueryDict
from django.test import RequestFactory, SimpleTestCase, override_settings
from django.utils.safestring import mark_safe

from .conf import SortableConfig
from .exceptions import ConfigurationError
from .link import SortableLink, format_title, sortable_link
from .parameters import LinkSpec, explode_sort_parameter, parse_parameters
from .querystring import http_build_query, persisted_parameters
from .request import RepeatedValue, SortRequest, get_sortable_context, query_to_dict


class ExplodeSortParameterTest(SimpleTestCase):

    def test_plain_column(self):
        self.assertEqual(explode_sort_parameter('name'), [])

    def test_relation_column(self):
        self.assertEqual(explode_sort_parameter('author.name'), ['author', 'name'])

    def test_too_many_segments(self):
        with self.assertRaises(ConfigurationError):
            explode_sort_parameter('a.b.c')

    def test_empty_segment(self):
        with self.assertRaises(ConfigurationError):
            explode_sort_parameter('author.')

    def test_custom_separator(self):
        self.assertEqual(explode_sort_parameter('author__name', '__'), ['author', 'name'])
        self.assertEqual(explode_sort_parameter('author.name', '__'), [])


class ParseParametersTest(SimpleTestCase):

    def test_sort_key_only(self):
        spec = parse_parameters(['name'])
        self.assertEqual(spec.sort_key, 'name')
        self.assertEqual(spec.column, 'name')
        self.assertIsNone(spec.relation)
        self.assertIsNone(spec.title)
        self.assertEqual(spec.query_prefix, '')
        self.assertEqual(spec.extra_query_params, {})
        self.assertEqual(spec.anchor_attributes, {})

    def test_relation_key(self):
        spec = parse_parameters(['author.name', 'Author'])
        self.assertEqual(spec.relation, 'author')
        self.assertEqual(spec.column, 'name')
        self.assertEqual(spec.title, 'Author')

    def test_all_slots(self):
        spec = parse_parameters(['name', 'Name', 'users_', {'tab': 'all'}, {'id': 'name-header'}])
        self.assertEqual(spec.query_prefix, 'users_')
        self.assertEqual(spec.extra_query_params, {'tab': 'all'})
        self.assertEqual(spec.anchor_attributes, {'id': 'name-header'})

    def test_wrong_typed_trailing_arguments_are_dropped(self):
        spec = parse_parameters(['name', 'Name', 5, 'tab=all', ['id']])
        self.assertEqual(spec.query_prefix, '')
        self.assertEqual(spec.extra_query_params, {})
        self.assertEqual(spec.anchor_attributes, {})

    def test_missing_sort_key(self):
        with self.assertRaises(ConfigurationError):
            parse_parameters([])

    def test_bad_relation_key(self):
        with self.assertRaises(ConfigurationError):
            parse_parameters(['a.b.c'])


class QueryHelpersTest(SimpleTestCase):

    def test_query_to_dict(self):
        params = query_to_dict(QueryDict('a=1&a=2&b=3&tags[]=x&tags[]=y'))
        self.assertEqual(list(params), ['a', 'b', 'tags'])
        self.assertEqual(params['a'], ['1', '2'])
        self.assertIsInstance(params['a'], RepeatedValue)
        self.assertEqual(params['b'], '3')
        self.assertEqual(params['tags'], ['x', 'y'])
        self.assertNotIsInstance(params['tags'], RepeatedValue)

    def test_repeated_value_reads_last(self):
        sort_request = SortRequest(RequestFactory().get('/users?sort=email&sort=name'))
        self.assertEqual(sort_request.get('sort'), 'name')

    def test_http_build_query_repeated_keys(self):
        query = http_build_query({'status': RepeatedValue(['1', '2']), 'ids': ['3']})
        self.assertEqual(query, 'status=1&status=2&ids%5B0%5D=3')

    def test_http_build_query(self):
        query = http_build_query({
            'filter': {'name': 'bob'},
            'ids': [3, 4],
            'flag': True,
            'skip': None,
            'q': 'a b',
        })
        self.assertEqual(query, 'filter%5Bname%5D=bob&ids%5B0%5D=3&ids%5B1%5D=4&flag=1&q=a+b')

    def test_persisted_parameters(self):
        request = RequestFactory().get('/users?foo=bar&q=&page=3&sort=name&direction=asc&tags[]=')
        params = persisted_parameters(SortRequest(request))
        self.assertEqual(dict(params), {'foo': 'bar', 'tags': ['']})


class SortableLinkTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def render(self, path, *parameters, **options):
        config = SortableConfig(**options)
        return sortable_link(self.factory.get(path), *parameters, config=config)

    def test_unsorted_link(self):
        """Renders the default icon and default direction when nothing is sorted"""
        html = self.render('/users', 'name')
        self.assertEqual(
            html,
            '<a href="/users?sort=name&direction=asc">name</a><i class="fa fa-sort"></i>'
        )

    def test_uses_settings_when_no_config_given(self):
        html = sortable_link(self.factory.get('/users'), 'name')
        self.assertEqual(
            html,
            '<a href="/users?sort=name&direction=asc">name</a><i class="fa fa-sort"></i>'
        )

    def test_toggle_asc_to_desc(self):
        html = self.render('/users?sort=name&direction=asc', 'name')
        self.assertIn('href="/users?sort=name&direction=desc"', html)
        self.assertIn('<i class="fa fa-sort-asc"></i>', html)

    def test_toggle_desc_to_asc(self):
        html = self.render('/users?sort=name&direction=desc', 'name')
        self.assertIn('href="/users?sort=name&direction=asc"', html)
        self.assertIn('<i class="fa fa-sort-desc"></i>', html)

    def test_invalid_ambient_direction_is_unsorted(self):
        html = self.render('/users?sort=name&direction=up', 'name')
        self.assertIn('direction=asc', html)
        self.assertIn('<i class="fa fa-sort"></i>', html)

    def test_default_direction_unsorted(self):
        html = self.render('/users', 'name', default_direction_unsorted='desc')
        self.assertIn('href="/users?sort=name&direction=desc"', html)

    def test_persisted_parameters_drop_page(self):
        html = self.render('/users?foo=bar&page=3&sort=name&direction=asc', 'name')
        self.assertIn('href="/users?foo=bar&sort=name&direction=desc"', html)
        self.assertNotIn('page', html)

    def test_array_parameters_are_kept(self):
        html = self.render('/users?q=&tags[]=a&tags[]=b', 'name')
        self.assertIn('href="/users?tags%5B0%5D=a&tags%5B1%5D=b&sort=name&direction=asc"', html)

    def test_sort_state_wins_over_extra_parameters(self):
        html = self.render('/users?tab=open', 'name', None, '', {'sort': 'email', 'tab': 'all'})
        self.assertIn('href="/users?sort=name&tab=open&direction=asc"', html)

    def test_query_prefix(self):
        html = self.render(
            '/users?users_sort=name&users_direction=desc&sort=email',
            'name', None, 'users_'
        )
        self.assertIn('href="/users?sort=email&users_sort=name&users_direction=asc"', html)
        self.assertIn('<i class="fa fa-sort-desc"></i>', html)

    def test_column_icon_lookup(self):
        columns = [
            {'class': 'fa fa-sort-alpha', 'rows': ['name', 'email']},
            {'class': 'fa fa-sort-amount', 'rows': ['total']},
        ]
        html = self.render('/users?sort=name&direction=desc', 'name', columns=columns)
        self.assertIn('<i class="fa fa-sort-alpha-desc"></i>', html)

    def test_relation_toggle_uses_raw_sort_key(self):
        html = self.render(
            '/books?sort=author.name&direction=asc',
            'author.name', 'Author', active_anchor_class='active'
        )
        self.assertEqual(
            html,
            '<a href="/books?sort=author.name&direction=desc">Author</a>'
            '<i class="fa fa-sort-asc"></i>'
        )

    def test_active_class_uses_resolved_column(self):
        html = self.render('/books?sort=name', 'author.name', 'Author', active_anchor_class='active')
        self.assertIn('<a class="active" href="/books?sort=author.name&direction=asc">', html)

    def test_css_classes_and_attributes(self):
        html = self.render(
            '/users?sort=name&direction=asc',
            'name', None, '', {}, {'class': 'btn btn-sm', 'id': 'name-header', 'data-sortable': ''},
            anchor_class='sortable',
            active_anchor_class='active',
            direction_anchor_class_prefix='dir',
        )
        self.assertEqual(
            html,
            '<a class="sortable active dir-asc btn btn-sm" href="/users?sort=name&direction=desc"'
            ' id="name-header" data-sortable>name</a><i class="fa fa-sort-asc"></i>'
        )

    def test_href_override(self):
        html = self.render('/users', 'name', None, '', {}, {'href': '/people'})
        self.assertIn('href="/people?sort=name&direction=asc"', html)
        self.assertEqual(html.count('href='), 1)

    def test_clickable_icon(self):
        html = self.render('/users', 'name', clickable_icon=True, icon_text_separator=' ')
        self.assertEqual(
            html,
            '<a href="/users?sort=name&direction=asc">name <i class="fa fa-sort"></i></a>'
        )

    def test_icon_outside_anchor(self):
        html = self.render('/users', 'name', icon_text_separator=' ')
        self.assertEqual(
            html,
            '<a href="/users?sort=name&direction=asc">name</a> <i class="fa fa-sort"></i>'
        )

    def test_icons_disabled(self):
        html = self.render('/users', 'name', enable_icons=False, icon_text_separator=' ')
        self.assertEqual(html, '<a href="/users?sort=name&direction=asc">name</a>')

    def test_title_is_escaped(self):
        html = self.render('/users', 'name', '<b>Name</b>')
        self.assertIn('>&lt;b&gt;Name&lt;/b&gt;</a>', html)

    def test_trusted_title_is_not_escaped(self):
        html = self.render('/users', 'name', mark_safe('<b>Name</b>'), formatting_function=str.upper)
        self.assertIn('><b>Name</b></a>', html)

    def test_idempotent(self):
        request = self.factory.get('/users?foo=bar&sort=name&direction=asc')
        link = SortableLink(request, config=SortableConfig())
        self.assertEqual(link.render('name').html, link.render('name').html)

    def test_bad_sort_key_propagates(self):
        with self.assertRaises(ConfigurationError):
            self.render('/users', 'a.b.c')

    def test_repeated_keys_survive_the_link(self):
        """A multi-value filter still reads back with getlist after clicking"""
        html = self.render('/users?status=1&status=2', 'name')
        self.assertIn('href="/users?status=1&status=2&sort=name&direction=asc"', html)

        result = SortableLink(self.factory.get('/users?status=1&status=2'), config=SortableConfig()).render('name')
        query = result.href.split('?', 1)[1]
        self.assertEqual(QueryDict(query).getlist('status'), ['1', '2'])

    def test_repeated_sort_uses_last_value(self):
        """Like QueryDict.get, the last sort value is the active one"""
        html = self.render('/users?sort=email&sort=name&direction=asc', 'name', active_anchor_class='active')
        self.assertEqual(
            html,
            '<a class="active" href="/users?sort=name&direction=desc">name</a>'
            '<i class="fa fa-sort-asc"></i>'
        )


class RenderResultTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_result_fields(self):
        request = self.factory.get('/users?sort=name&direction=asc')
        config = SortableConfig(anchor_class='sortable', clickable_icon=True)
        result = SortableLink(request, config=config).render(LinkSpec.build('name', title='Full name'))
        self.assertEqual(result.href, '/users?sort=name&direction=desc')
        self.assertEqual(result.css_classes, ['sortable'])
        self.assertEqual(result.icon_class, 'fa fa-sort-asc')
        self.assertEqual(result.title, 'Full name')
        self.assertEqual(result.icon_placement, 'inside')
        self.assertIsNone(result.injected_title)
        self.assertEqual(str(result), result.html)

    def test_icon_class_is_none_when_disabled(self):
        result = SortableLink(self.factory.get('/users'), config=SortableConfig(enable_icons=False)).render('name')
        self.assertIsNone(result.icon_class)
        self.assertEqual(result.icon_placement, 'outside')

    def test_custom_url_resolver(self):
        link = SortableLink(
            self.factory.get('/users'),
            config=SortableConfig(),
            resolve_url=lambda url: 'https://example.com' + url,
        )
        self.assertEqual(link.render('name').href, 'https://example.com/users?sort=name&direction=asc')

    def test_quotes_in_href_are_escaped(self):
        link = SortableLink(
            self.factory.get('/users'),
            config=SortableConfig(),
            resolve_url=lambda url: '/say"hi"' + url,
        )
        result = link.render('name')
        self.assertEqual(result.href, '/say"hi"/users?sort=name&direction=asc')
        self.assertIn('href="/say&quot;hi&quot;/users?sort=name&direction=asc"', result.html)


class TitleTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_format_missing_title(self):
        config = SortableConfig(formatting_function=str.upper)
        self.assertEqual(format_title(None, 'name', config), 'NAME')

    def test_format_custom_title(self):
        config = SortableConfig(formatting_function=str.upper)
        self.assertEqual(format_title('Full name', 'name', config), 'FULL NAME')

    def test_custom_titles_left_alone(self):
        config = SortableConfig(formatting_function=str.upper, format_custom_titles=False)
        self.assertEqual(format_title('Full name', 'name', config), 'Full name')
        self.assertEqual(format_title(None, 'name', config), 'NAME')

    def test_injected_formatter_wins(self):
        config = SortableConfig(formatting_function=str.upper)
        self.assertEqual(format_title(None, 'name', config, formatter=str.title), 'Name')

    def test_dotted_path_formatter(self):
        config = SortableConfig(formatting_function='django.utils.text.capfirst')
        html = sortable_link(self.factory.get('/users'), 'name', config=config)
        self.assertIn('>Name</a>', html)

    def test_bad_dotted_path(self):
        config = SortableConfig(formatting_function='columnsortable.missing_formatter')
        with self.assertRaises(ImproperlyConfigured):
            format_title(None, 'name', config)

    def test_title_mirrored_into_request(self):
        request = self.factory.get('/users')
        config = SortableConfig(inject_title_as='sort_title')
        sortable_link(request, 'name', 'Name', config=config)
        self.assertEqual(get_sortable_context(request), {'sort_title': 'Name'})

        sortable_link(request, 'email', 'Email', config=config)
        self.assertEqual(get_sortable_context(request)['sort_title'], 'Email')

    def test_nothing_mirrored_by_default(self):
        request = self.factory.get('/users')
        sortable_link(request, 'name', config=SortableConfig())
        self.assertEqual(get_sortable_context(request), {})


class SortableConfigTest(SimpleTestCase):

    @override_settings(COLUMNSORTABLE={'anchor_class': 'sortable', 'clickable_icon': True})
    def test_from_settings(self):
        config = SortableConfig.from_settings()
        self.assertEqual(config.anchor_class, 'sortable')
        self.assertTrue(config.clickable_icon)
        self.assertEqual(config.asc_suffix, '-asc')

    @override_settings(COLUMNSORTABLE={'anchor_class': 'sortable'})
    def test_overrides(self):
        config = SortableConfig.from_settings(anchor_class='th-link')
        self.assertEqual(config.anchor_class, 'th-link')

    @override_settings(COLUMNSORTABLE={'anchor_klass': 'sortable'})
    def test_unknown_option(self):
        with self.assertRaises(ImproperlyConfigured):
            SortableConfig.from_settings()

    @override_settings(COLUMNSORTABLE=['sortable'])
    def test_not_a_dict(self):
        with self.assertRaises(ImproperlyConfigured):
            SortableConfig.from_settings()

    def test_bad_default_direction(self):
        with self.assertRaises(ImproperlyConfigured):
            SortableConfig(default_direction_unsorted='sideways')
