from .exceptions import ColumnSortableError, ConfigurationError
from .link import SortableLink, format_title, sortable_link
from .parameters import LinkSpec, explode_sort_parameter, parse_parameters
