from django.apps import AppConfig


class ColumnsortableConfig(AppConfig):
    name = 'columnsortable'
    verbose_name = 'Column sortable links'
