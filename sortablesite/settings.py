SECRET_KEY = 'columnsortable-insecure-test-key'

DEBUG = True

ALLOWED_HOSTS = ['*']

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'columnsortable',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

USE_TZ = True

COLUMNSORTABLE = {
    'sortable_icon': 'fa fa-sort',
    'default_icon_set': 'fa fa-sort',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {'class': 'logging.StreamHandler'},
    },
    'loggers': {
        'columnsortable': {'handlers': ['console'], 'level': 'INFO'},
    },
}
